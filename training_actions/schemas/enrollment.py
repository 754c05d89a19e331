from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict


class EnrollmentCreate(BaseModel):
    action_id: int
    student_id: int


class MTEnrollmentCreate(BaseModel):
    module_teaching_id: int
    student_id: int


class EnrollmentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    action_id: int
    student_id: int
    evaluation: float
    approved: bool
    payment_total: float
    payment_date: Optional[date] = None
    created_at: datetime


class MTEnrollmentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    module_teaching_id: int
    student_id: int
    teacher_evaluation: float
    approved: bool
