import logging
from datetime import date, time

from sqlmodel import Session

from ..errors import NotFoundError, ValidationError
from ..models import ModuleTeaching, PresenceEnum, TrainingSession, WeekDay, parse_enum
from ..utils import utcnow
from .persistence import commit

log = logging.getLogger(__name__)


def get_training_session(session: Session, session_id: int) -> TrainingSession:
    training_session = session.get(TrainingSession, session_id)
    if not training_session:
        log.warning("Session %s not found", session_id)
        raise NotFoundError("Session not found.")
    return training_session


def schedule_session(
    session: Session,
    module_teaching_id: int,
    scheduled_date: date,
    start: time,
    duration_hours: float,
    note: str = "",
) -> TrainingSession:
    teaching = session.get(ModuleTeaching, module_teaching_id)
    if not teaching:
        raise NotFoundError("Teaching assignment not found.")
    action = teaching.action
    if not action.is_active:
        raise ValidationError("Cannot schedule sessions for a completed or cancelled action.")
    if duration_hours <= 0:
        raise ValidationError("Session duration must be positive.")
    if not action.start_date <= scheduled_date <= action.end_date:
        log.warning("Session date %s outside action %s range", scheduled_date, action.id)
        raise ValidationError("The session date must fall within the action dates.")

    course = action.course
    if course.remaining_duration != 0:
        log.warning(
            "Course %s has %sh of %sh assigned; cannot schedule sessions for action %s",
            course.id, course.current_duration, course.total_duration, action.id,
        )
        raise ValidationError(
            f"The course modules must fill its total duration before scheduling sessions "
            f"({course.current_duration:g} of {course.total_duration:g}h assigned)."
        )

    weekday = WeekDay.from_date(scheduled_date)
    if action.week_days and weekday.value not in action.week_days:
        raise ValidationError(f"{weekday.value.title()} is not a week day of this action.")

    if teaching.scheduled_hours + duration_hours > teaching.module.hours:
        raise ValidationError(
            f"Scheduling {duration_hours:g}h exceeds the module hours "
            f"({teaching.scheduled_hours:g} of {teaching.module.hours:g}h scheduled)."
        )

    training_session = TrainingSession(
        module_teaching=teaching,
        weekday=weekday,
        scheduled_date=scheduled_date,
        start=start,
        duration_hours=duration_hours,
        note=note,
    )
    session.add(training_session)
    commit(session, conflict_message="Conflicting session.", failure_message="Error scheduling session.")
    session.refresh(training_session)
    return training_session


def set_teacher_presence(session: Session, session_id: int, presence: str) -> TrainingSession:
    training_session = get_training_session(session, session_id)
    training_session.teacher_presence = parse_enum(PresenceEnum, presence, "presence")
    training_session.updated_at = utcnow()
    commit(session, conflict_message="Conflicting session.", failure_message="Error updating session.")
    session.refresh(training_session)
    return training_session


def delete_session(session: Session, session_id: int) -> None:
    training_session = get_training_session(session, session_id)
    if training_session.teacher_presence == PresenceEnum.PRESENT:
        raise ValidationError("The session was already lectured and cannot be deleted.")
    session.delete(training_session)
    commit(session, conflict_message="Conflicting session.", failure_message="Error deleting session.")
