from datetime import date
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class CourseCreate(BaseModel):
    title: str
    total_duration: float = Field(ge=0)
    module_ids: List[int] = []
    status: str = "NOT_STARTED"
    area: str = ""


class CourseModules(BaseModel):
    module_ids: List[int]


class ModuleRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    hours: float
    is_active: bool


class CourseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    total_duration: float
    current_duration: float
    remaining_duration: float
    status: str
    modules: List[ModuleRead]


class ActionCreate(BaseModel):
    course_id: int
    coordinator_id: int
    administration_code: str
    start_date: date
    end_date: date
    week_days: List[str] = []
    status: Optional[str] = None
    regiment: Optional[str] = None
    locality: str = ""
    action_number: int = 1


class ActionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    course_id: int
    coordinator_id: int
    title: str
    administration_code: str
    start_date: date
    end_date: date
    status: str
    regiment: str


class TeacherAssignment(BaseModel):
    module_id: int
    teacher_id: int


class ModuleTeachingRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    action_id: int
    module_id: int
    teacher_id: int
    payment_total: float
    payment_date: Optional[date] = None


class StaffingRead(BaseModel):
    action_id: int
    fully_staffed: bool
    modules_without_teacher: List[ModuleRead]


class CategoryCreate(BaseModel):
    name: str
    shorten_name: str


class CategoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    shorten_name: str
