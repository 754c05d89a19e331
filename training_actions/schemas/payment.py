from datetime import date
from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class SettlementRead(BaseModel):
    category_hours: Dict[str, float]
    category_totals: Dict[str, float]
    total_hours: float
    total_days: int
    calculated_total: float


class StudentPayment(BaseModel):
    action_enrollment_id: int
    action_id: int
    action_title: str
    student_id: int
    student_name: str
    payment_total: float
    calculated_total: float
    payment_date: Optional[date] = None
    payment_processed: bool


class TeacherPayment(BaseModel):
    module_teaching_id: int
    module_id: int
    module_name: str
    teacher_id: int
    teacher_name: str
    lectured_hours: float
    payment_total: float
    calculated_total: float
    payment_date: Optional[date] = None
    payment_processed: bool


class SettlePayment(BaseModel):
    payment_total: float = Field(ge=0)
    payment_date: date


class ReportRow(BaseModel):
    name: str
    settlement: SettlementRead


class SettlementReportRead(BaseModel):
    categories: List[str]
    rows: List[ReportRow]
    category_hours: Dict[str, float]
    category_totals: Dict[str, float]
    total_hours: float
    total_days: int
    total_payment: float


class RatesUpdate(BaseModel):
    hour_value_teacher: float = Field(ge=0)
    hour_value_alimentation: float = Field(ge=0)
