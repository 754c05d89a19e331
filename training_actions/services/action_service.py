import logging
from datetime import date
from typing import Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from ..errors import ConflictError, InternalError, NotFoundError, ValidationError
from ..models import (
    Course, CourseAction, Module, ModuleTeaching, RegimentType, StatusEnum, Teacher, User, WeekDay,
    parse_enum,
)
from .persistence import commit

log = logging.getLogger(__name__)

TEACHER_ALREADY_ASSIGNED = "A teacher is already assigned to this module in this action."


def get_action(session: Session, action_id: int) -> CourseAction:
    action = session.get(CourseAction, action_id)
    if not action:
        log.warning("Action %s not found", action_id)
        raise NotFoundError("Action not found.")
    return action


def create_action(
    session: Session,
    course_id: int,
    coordinator_id: int,
    administration_code: str,
    start_date: date,
    end_date: date,
    week_days: Iterable[str] = (),
    status: Optional[str] = None,
    regiment: Optional[str] = None,
    locality: str = "",
    action_number: int = 1,
) -> CourseAction:
    course = session.get(Course, course_id)
    if not course:
        raise NotFoundError("Course not found.")
    if not course.is_active:
        raise ValidationError("Cannot create an action for a completed or cancelled course.")
    if not session.get(User, coordinator_id):
        raise NotFoundError("Coordinator not found.")

    code_taken = session.exec(
        select(CourseAction).where(CourseAction.administration_code == administration_code)
    ).first()
    if code_taken:
        log.warning("Action with administration code %r already exists", administration_code)
        raise ConflictError("An action with the same administration code already exists.")

    parsed_status = parse_enum(StatusEnum, status, "status") if status else StatusEnum.NOT_STARTED
    parsed_regiment = parse_enum(RegimentType, regiment, "regiment") if regiment else RegimentType.HYBRID
    days = [parse_enum(WeekDay, d, "week day").value for d in week_days]

    if start_date >= end_date:
        log.warning("Action start %s is not before end %s", start_date, end_date)
        raise ValidationError("The start date must be before the end date.")

    action = CourseAction(
        course_id=course.id,
        coordinator_id=coordinator_id,
        administration_code=administration_code,
        action_number=action_number,
        locality=locality,
        week_days=days,
        start_date=start_date,
        end_date=end_date,
        status=parsed_status,
        regiment=parsed_regiment,
    )
    session.add(action)
    commit(session,
           conflict_message="An action with the same administration code already exists.",
           failure_message="Error creating action.")
    session.refresh(action)
    log.info("Action %s created for course %s", action.id, course.id)
    return action


def assign_teacher(session: Session, action_id: int, module_id: int, teacher_id: int) -> ModuleTeaching:
    action = get_action(session, action_id)
    module = session.get(Module, module_id)
    if not module:
        raise NotFoundError("Module not found.")
    teacher = session.get(Teacher, teacher_id)
    if not teacher:
        raise NotFoundError("Teacher not found.")
    if all(m.id != module.id for m in action.course.modules):
        raise ValidationError("The module does not belong to the action's course.")

    exists = session.exec(select(ModuleTeaching).where(
        ModuleTeaching.action_id == action_id,
        ModuleTeaching.module_id == module_id,
    )).first()
    if exists:
        log.warning("Module %s of action %s already has teacher %s", module_id, action_id, exists.teacher_id)
        raise ConflictError(TEACHER_ALREADY_ASSIGNED)

    teaching = ModuleTeaching(action=action, module=module, teacher=teacher)
    session.add(teaching)
    commit(session,
           conflict_message=TEACHER_ALREADY_ASSIGNED,
           failure_message="Error assigning teacher.")
    session.refresh(teaching)
    log.info("Teacher %s assigned to module %s in action %s", teacher_id, module_id, action_id)
    return teaching


def delete_action(session: Session, action_id: int) -> None:
    """Delete an action and everything it owns in one transaction.

    Commits only on success. A failure rolls back and is re-raised; there is
    no commit after a rollback.
    """
    action = get_action(session, action_id)
    try:
        session.delete(action)
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        log.exception("Error deleting course action %s", action_id)
        raise InternalError("Error deleting the action.") from exc
    log.info("Action %s deleted", action_id)
