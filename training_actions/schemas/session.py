from datetime import date, time
from pydantic import BaseModel, ConfigDict, Field
from ..models.enums import PresenceEnum, WeekDay


class SessionCreate(BaseModel):
    module_teaching_id: int
    scheduled_date: date
    start: time
    duration_hours: float = Field(gt=0)
    note: str = ""


class TeacherPresenceUpdate(BaseModel):
    presence: str


class SessionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    module_teaching_id: int
    weekday: WeekDay
    scheduled_date: date
    start: time
    duration_hours: float
    teacher_presence: PresenceEnum
    time_span: str
    note: str
