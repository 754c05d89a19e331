from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlmodel import Session
from ..db import get_session
from ..models import ActionEnrollment
from ..schemas.payment import (
    RatesUpdate, ReportRow, SettlePayment, SettlementRead, SettlementReportRead, StudentPayment, TeacherPayment,
)
from ..services import payments_service
from ..services.settlement import SettlementReport

router = APIRouter()


def _report_read(report: SettlementReport) -> SettlementReportRead:
    rows = []
    for owner, result in report.rows:
        if isinstance(owner, ActionEnrollment):
            name = owner.student.full_name
        else:
            name = f"{owner.teacher.full_name} ({owner.module.name})"
        rows.append(ReportRow(name=name, settlement=SettlementRead(**vars(result))))
    return SettlementReportRead(
        categories=report.categories,
        rows=rows,
        category_hours=report.category_hours,
        category_totals=report.category_totals,
        total_hours=report.total_hours,
        total_days=report.total_days,
        total_payment=report.total_payment,
    )


@router.put("/rates")
def update_rates(data: RatesUpdate, session: Session = Depends(get_session)) -> RatesUpdate:
    info = payments_service.save_rates(session, data.hour_value_teacher, data.hour_value_alimentation)
    return RatesUpdate(hour_value_teacher=info.hour_value_teacher, hour_value_alimentation=info.hour_value_alimentation)


@router.get("/actions/{action_id}/students")
def student_payments(action_id: int, session: Session = Depends(get_session)) -> List[StudentPayment]:
    return payments_service.student_payments(session, action_id)


@router.get("/actions/{action_id}/teachers")
def teacher_payments(action_id: int, session: Session = Depends(get_session)) -> List[TeacherPayment]:
    return payments_service.teacher_payments(session, action_id)


@router.get("/actions/{action_id}/students/report")
def student_report(
    action_id: int, year: Optional[int] = None, month: Optional[int] = None, session: Session = Depends(get_session)
) -> SettlementReportRead:
    period = (year, month) if year is not None and month is not None else None
    return _report_read(payments_service.student_report(session, action_id, period))


@router.get("/actions/{action_id}/teachers/report")
def teacher_report(
    action_id: int, year: Optional[int] = None, month: Optional[int] = None, session: Session = Depends(get_session)
) -> SettlementReportRead:
    period = (year, month) if year is not None and month is not None else None
    return _report_read(payments_service.teacher_report(session, action_id, period))


@router.put("/enrollments/{enrollment_id}")
def settle_enrollment(enrollment_id: int, data: SettlePayment, session: Session = Depends(get_session)) -> SettlePayment:
    enrollment = payments_service.settle_enrollment(session, enrollment_id, data.payment_total, data.payment_date)
    return SettlePayment(payment_total=enrollment.payment_total, payment_date=enrollment.payment_date)


@router.put("/teachings/{module_teaching_id}")
def settle_teaching(module_teaching_id: int, data: SettlePayment, session: Session = Depends(get_session)) -> SettlePayment:
    teaching = payments_service.settle_teaching(session, module_teaching_id, data.payment_total, data.payment_date)
    return SettlePayment(payment_total=teaching.payment_total, payment_date=teaching.payment_date)
