from datetime import date, time

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import Session, select

from training_actions.errors import ConflictError, InternalError, NotFoundError, ValidationError
from training_actions.models import (
    ActionEnrollment, CourseAction, ModuleTeaching, PresenceEnum, RegimentType, SessionParticipation,
    TrainingSession,
)
from training_actions.services import action_service, enrollment_service, session_service

from .conftest import fill_course, make_session


def test_create_action(session: Session, catalog):
    action = action_service.create_action(
        session,
        course_id=catalog["course"].id,
        coordinator_id=catalog["coordinator"].id,
        administration_code="ADM-1",
        start_date=date(2025, 1, 6),
        end_date=date(2025, 2, 28),
        week_days=["monday", "Wednesday"],
        regiment="online",
        locality="Porto",
        action_number=3,
    )
    assert action.title == "3 - Porto"
    assert action.week_days == ["MONDAY", "WEDNESDAY"]
    assert action.regiment == RegimentType.ONLINE


@pytest.mark.parametrize(
    "overrides, error",
    [
        ({"start_date": date(2025, 3, 1), "end_date": date(2025, 3, 1)}, ValidationError),
        ({"start_date": date(2025, 4, 1), "end_date": date(2025, 3, 1)}, ValidationError),
        ({"status": "paused"}, ValidationError),
        ({"regiment": "remote"}, ValidationError),
        ({"week_days": ["funday"]}, ValidationError),
        ({"course_id": 999}, NotFoundError),
        ({"coordinator_id": 999}, NotFoundError),
    ],
)
def test_create_action_validation(session: Session, catalog, overrides, error):
    params = dict(
        course_id=catalog["course"].id,
        coordinator_id=catalog["coordinator"].id,
        administration_code="ADM-2",
        start_date=date(2025, 1, 6),
        end_date=date(2025, 2, 28),
    )
    params.update(overrides)
    with pytest.raises(error):
        action_service.create_action(session, **params)
    assert session.exec(select(CourseAction)).all() == []


def test_duplicate_administration_code(session: Session, action, catalog):
    with pytest.raises(ConflictError):
        action_service.create_action(
            session,
            course_id=catalog["course"].id,
            coordinator_id=catalog["coordinator"].id,
            administration_code=action.administration_code,
            start_date=date(2025, 1, 6),
            end_date=date(2025, 2, 28),
        )


def test_assign_teacher_rules(session: Session, action, catalog):
    m1 = catalog["modules"][0]
    t1 = catalog["teachers"][0]
    action_service.assign_teacher(session, action.id, m1.id, t1.id)
    with pytest.raises(ConflictError):
        action_service.assign_teacher(session, action.id, m1.id, t1.id)
    with pytest.raises(ConflictError):
        action_service.assign_teacher(session, action.id, m1.id, catalog["teachers"][1].id)
    with pytest.raises(NotFoundError):
        action_service.assign_teacher(session, action.id, m1.id, 999)


def test_delete_action_cascades(session: Session, staffed_action, catalog):
    enrollment = enrollment_service.admit_enrollment(session, staffed_action.id, catalog["students"][0].id)
    training_session = make_session(session, staffed_action.module_teachings[0], staffed_action.start_date, 2)
    session.add(SessionParticipation(session=training_session, enrollment=enrollment, attendance=2))
    session.commit()

    action_service.delete_action(session, staffed_action.id)

    for model in (CourseAction, ModuleTeaching, TrainingSession, ActionEnrollment, SessionParticipation):
        assert session.exec(select(model)).all() == []
    with pytest.raises(NotFoundError):
        action_service.delete_action(session, staffed_action.id)


def test_failed_delete_rolls_back_without_commit(session: Session, staffed_action, monkeypatch):
    calls = []

    def failing_commit():
        calls.append("commit")
        raise OperationalError("DELETE", {}, Exception("disk I/O error"))

    real_rollback = session.rollback

    def tracking_rollback():
        calls.append("rollback")
        real_rollback()

    monkeypatch.setattr(session, "commit", failing_commit)
    monkeypatch.setattr(session, "rollback", tracking_rollback)

    with pytest.raises(InternalError):
        action_service.delete_action(session, staffed_action.id)
    assert calls == ["commit", "rollback"]

    monkeypatch.undo()
    assert session.get(CourseAction, staffed_action.id) is not None


def test_schedule_session_rules(session: Session, staffed_action, catalog):
    fill_course(session, catalog["course"])
    teaching = staffed_action.module_teachings[0]
    hours = teaching.module.hours

    with pytest.raises(ValidationError):
        session_service.schedule_session(session, teaching.id, date(2025, 1, 1), time(9), 3)
    with pytest.raises(ValidationError):
        session_service.schedule_session(session, teaching.id, staffed_action.start_date, time(9), hours + 1)

    scheduled = session_service.schedule_session(session, teaching.id, staffed_action.start_date, time(9), 3)
    assert scheduled.weekday.value == "MONDAY"
    assert scheduled.time_span == "09:00 - 12:00"


def test_sessions_wait_for_a_fully_assigned_course(session: Session, staffed_action, catalog):
    course = catalog["course"]
    assert (course.total_duration, course.current_duration) == (100, 90)
    teaching = staffed_action.module_teachings[0]

    with pytest.raises(ValidationError) as exc:
        session_service.schedule_session(session, teaching.id, date(2025, 3, 4), time(9), 3)
    assert "90 of 100h" in exc.value.message
    assert session.exec(select(TrainingSession)).all() == []

    fill_course(session, course)
    scheduled = session_service.schedule_session(session, teaching.id, date(2025, 3, 4), time(9), 3)
    assert scheduled.id is not None


def test_lectured_session_cannot_be_deleted(session: Session, staffed_action):
    teaching = staffed_action.module_teachings[0]
    training_session = make_session(session, teaching, staffed_action.start_date, 3)

    updated = session_service.set_teacher_presence(session, training_session.id, "present")
    assert updated.teacher_presence == PresenceEnum.PRESENT
    with pytest.raises(ValidationError):
        session_service.delete_session(session, training_session.id)
    with pytest.raises(ValidationError):
        session_service.set_teacher_presence(session, training_session.id, "maybe")
