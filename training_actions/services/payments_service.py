import calendar
import logging
from datetime import date
from typing import List, Optional, Tuple

from sqlmodel import Session, select

from ..errors import NotFoundError, ValidationError
from ..models import ActionEnrollment, GeneralInfo, ModuleCategory, ModuleTeaching
from ..schemas.payment import StudentPayment, TeacherPayment
from ..utils import utcnow
from .action_service import get_action
from .persistence import commit
from .settlement import (
    Period, SettlementRates, SettlementReport, build_report, compute_enrollment_settlement,
    compute_teaching_settlement,
)

log = logging.getLogger(__name__)


def load_rates(session: Session) -> SettlementRates:
    info = session.exec(select(GeneralInfo).order_by(GeneralInfo.id)).first()
    if info is None:
        log.warning("There is no GeneralInfo record to read settlement rates from")
        raise NotFoundError("No general information configured in the system.")
    return SettlementRates(
        teacher_hour_rate=info.hour_value_teacher,
        student_hour_rate=info.hour_value_alimentation,
    )


def save_rates(session: Session, hour_value_teacher: float, hour_value_alimentation: float) -> GeneralInfo:
    if hour_value_teacher < 0 or hour_value_alimentation < 0:
        raise ValidationError("Hourly rates must not be negative.")
    info = session.exec(select(GeneralInfo).order_by(GeneralInfo.id)).first()
    if info is None:
        info = GeneralInfo()
        session.add(info)
    info.hour_value_teacher = hour_value_teacher
    info.hour_value_alimentation = hour_value_alimentation
    info.updated_at = utcnow()
    commit(session, conflict_message="Conflicting rates.", failure_message="Error saving rates.")
    session.refresh(info)
    return info


def month_period(year: int, month: int) -> Period:
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month: {month}.")
    return date(year, month, 1), date(year, month, calendar.monthrange(year, month)[1])


def category_columns(session: Session) -> List[str]:
    return list(session.exec(select(ModuleCategory.shorten_name).order_by(ModuleCategory.id)).all())


def student_payments(session: Session, action_id: int, rates: Optional[SettlementRates] = None) -> List[StudentPayment]:
    action = get_action(session, action_id)
    rates = rates or load_rates(session)
    if not action.enrollments:
        raise NotFoundError("No student payments found for this action.")
    return [
        StudentPayment(
            action_enrollment_id=ae.id,
            action_id=action.id,
            action_title=action.title,
            student_id=ae.student_id,
            student_name=ae.student.full_name,
            payment_total=ae.payment_total,
            calculated_total=compute_enrollment_settlement(ae, rates.student_hour_rate).calculated_total,
            payment_date=ae.payment_date,
            payment_processed=ae.payment_processed,
        )
        for ae in action.enrollments
    ]


def teacher_payments(session: Session, action_id: int, rates: Optional[SettlementRates] = None) -> List[TeacherPayment]:
    action = get_action(session, action_id)
    rates = rates or load_rates(session)
    if not action.module_teachings:
        raise NotFoundError("No teacher payments found for this action.")
    return [
        TeacherPayment(
            module_teaching_id=mt.id,
            module_id=mt.module_id,
            module_name=mt.module.name,
            teacher_id=mt.teacher_id,
            teacher_name=mt.teacher.full_name,
            lectured_hours=mt.lectured_hours,
            payment_total=mt.payment_total,
            calculated_total=compute_teaching_settlement(mt, rates.teacher_hour_rate).calculated_total,
            payment_date=mt.payment_date,
            payment_processed=mt.payment_processed,
        )
        for mt in action.module_teachings
    ]


def student_report(
    session: Session,
    action_id: int,
    month: Optional[Tuple[int, int]] = None,
    rates: Optional[SettlementRates] = None,
) -> SettlementReport:
    action = get_action(session, action_id)
    rates = rates or load_rates(session)
    period = month_period(*month) if month else None
    return build_report(action.enrollments, rates.student_hour_rate, category_columns(session), period)


def teacher_report(
    session: Session,
    action_id: int,
    month: Optional[Tuple[int, int]] = None,
    rates: Optional[SettlementRates] = None,
) -> SettlementReport:
    action = get_action(session, action_id)
    rates = rates or load_rates(session)
    period = month_period(*month) if month else None
    return build_report(action.module_teachings, rates.teacher_hour_rate, category_columns(session), period)


def _check_payment(payment_total: float) -> None:
    if payment_total < 0:
        raise ValidationError("Payment total must not be negative.")


def settle_enrollment(session: Session, enrollment_id: int, payment_total: float, payment_date: date) -> ActionEnrollment:
    enrollment = session.get(ActionEnrollment, enrollment_id)
    if not enrollment:
        raise NotFoundError("Enrollment not found.")
    _check_payment(payment_total)
    enrollment.payment_total = payment_total
    enrollment.payment_date = payment_date
    enrollment.updated_at = utcnow()
    commit(session, conflict_message="Conflicting payment.", failure_message="Error saving student payment.")
    session.refresh(enrollment)
    log.info("Enrollment %s settled at %s on %s", enrollment_id, payment_total, payment_date)
    return enrollment


def settle_teaching(session: Session, module_teaching_id: int, payment_total: float, payment_date: date) -> ModuleTeaching:
    teaching = session.get(ModuleTeaching, module_teaching_id)
    if not teaching:
        raise NotFoundError("Teaching assignment not found.")
    _check_payment(payment_total)
    teaching.payment_total = payment_total
    teaching.payment_date = payment_date
    teaching.updated_at = utcnow()
    commit(session, conflict_message="Conflicting payment.", failure_message="Error saving teacher payment.")
    session.refresh(teaching)
    log.info("Teaching %s settled at %s on %s", module_teaching_id, payment_total, payment_date)
    return teaching
