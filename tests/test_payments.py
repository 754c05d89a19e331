from datetime import date

import pytest
from sqlmodel import Session, select

from training_actions.config import settings
from training_actions.errors import NotFoundError, ValidationError
from training_actions.models import GeneralInfo, PresenceEnum, SessionParticipation
from training_actions.seed import seed_rates
from training_actions.services import enrollment_service, payments_service
from training_actions.services.settlement import SettlementRates

from .conftest import make_session


@pytest.fixture
def paid_action(session: Session, staffed_action, catalog, rates):
    fm_teaching, cq_teaching = staffed_action.module_teachings
    enrollment = enrollment_service.admit_enrollment(session, staffed_action.id, catalog["students"][0].id)
    s_march = make_session(session, fm_teaching, date(2025, 3, 3), 3)
    s_april = make_session(session, cq_teaching, date(2025, 4, 1), 2)
    for training_session in (s_march, s_april):
        training_session.teacher_presence = PresenceEnum.PRESENT
        session.add(SessionParticipation(
            session=training_session, enrollment=enrollment, presence=PresenceEnum.PRESENT,
            attendance=training_session.duration_hours,
        ))
    session.commit()
    session.refresh(staffed_action)
    return staffed_action


def test_rates_come_from_general_info(session: Session, rates):
    loaded = payments_service.load_rates(session)
    assert loaded == SettlementRates(teacher_hour_rate=20.0, student_hour_rate=6.0)


def test_missing_general_info(session: Session):
    with pytest.raises(NotFoundError):
        payments_service.load_rates(session)


def test_save_rates(session: Session):
    payments_service.save_rates(session, 25.0, 5.5)
    payments_service.save_rates(session, 30.0, 7.0)
    assert payments_service.load_rates(session) == SettlementRates(30.0, 7.0)
    with pytest.raises(ValidationError):
        payments_service.save_rates(session, -1, 7.0)


def test_student_payments(session: Session, paid_action):
    [payment] = payments_service.student_payments(session, paid_action.id)
    assert payment.student_name == "João Pereira"
    assert payment.calculated_total == 30.0
    assert payment.payment_processed is False


def test_rates_can_be_overridden(session: Session, paid_action):
    [payment] = payments_service.student_payments(session, paid_action.id, rates=SettlementRates(10.0, 1.0))
    assert payment.calculated_total == 5.0


def test_teacher_payments(session: Session, paid_action):
    payments = payments_service.teacher_payments(session, paid_action.id)
    assert [p.calculated_total for p in payments] == [60.0, 40.0]
    assert [p.lectured_hours for p in payments] == [3.0, 2.0]
    assert payments[0].teacher_name == "Rui Silva"


def test_no_enrollments_means_no_student_payments(session: Session, staffed_action, rates):
    with pytest.raises(NotFoundError):
        payments_service.student_payments(session, staffed_action.id)


def test_monthly_reports(session: Session, paid_action):
    march = payments_service.student_report(session, paid_action.id, month=(2025, 3))
    assert march.category_totals == {"FM": 18.0, "CQ": 0.0}
    assert march.total_payment == 18.0

    april = payments_service.teacher_report(session, paid_action.id, month=(2025, 4))
    assert len(april.rows) == 1
    assert april.total_payment == 40.0

    whole = payments_service.teacher_report(session, paid_action.id)
    assert whole.total_payment == 100.0
    assert whole.total_days == 2


def test_invalid_month(session: Session, paid_action):
    with pytest.raises(ValidationError):
        payments_service.student_report(session, paid_action.id, month=(2025, 13))


def test_settle_enrollment_and_teaching(session: Session, paid_action):
    enrollment = paid_action.enrollments[0]
    settled = payments_service.settle_enrollment(session, enrollment.id, 30.0, date(2025, 5, 2))
    assert settled.payment_processed

    for teaching in paid_action.module_teachings:
        payments_service.settle_teaching(session, teaching.id, 50.0, date(2025, 5, 2))
    session.refresh(paid_action)
    assert paid_action.all_payments_processed

    with pytest.raises(ValidationError):
        payments_service.settle_enrollment(session, enrollment.id, -5, date(2025, 5, 2))
    with pytest.raises(NotFoundError):
        payments_service.settle_teaching(session, 999, 5, date(2025, 5, 2))


def test_seed_rates_from_settings(session: Session, monkeypatch):
    monkeypatch.setattr(settings, "DEFAULT_TEACHER_HOUR_RATE", 18.5)
    monkeypatch.setattr(settings, "DEFAULT_STUDENT_HOUR_RATE", 4.0)

    seed_rates(session)
    seed_rates(session)

    assert len(session.exec(select(GeneralInfo)).all()) == 1
    assert payments_service.load_rates(session) == SettlementRates(18.5, 4.0)
