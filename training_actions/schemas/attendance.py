from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from ..models.enums import PresenceEnum


class StudentAttendance(BaseModel):
    action_enrollment_id: int
    # Free-form; validated per row so one bad entry does not sink the roster.
    presence: str
    attendance: float = 0.0
    student_name: Optional[str] = None


class UpsertSessionAttendance(BaseModel):
    students: List[StudentAttendance]


class RecordAttendance(BaseModel):
    session_id: int
    action_enrollment_id: int
    presence: str
    attendance: float = Field(default=0.0, ge=0)


class ParticipationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    session_id: int
    action_enrollment_id: int
    presence: PresenceEnum
    attendance: float


class SkippedEntry(BaseModel):
    action_enrollment_id: int
    reason: str


class RosterResult(BaseModel):
    records: List[ParticipationRead]
    skipped: List[SkippedEntry]
