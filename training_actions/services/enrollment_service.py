import logging
from typing import List

from sqlmodel import Session, select

from ..errors import ConflictError, NotFoundError, ValidationError
from ..models import ActionEnrollment, CourseAction, ModuleTeaching, MTEnrollment, Student
from .coverage import missing_module_ids
from .persistence import commit

log = logging.getLogger(__name__)

MISSING_TEACHER = "Missing teacher on one or more modules."
ALREADY_ENROLLED = "The student is already enrolled in this action."


def _require_student(session: Session, student_id: int) -> Student:
    student = session.get(Student, student_id)
    if not student:
        log.warning("Student %s not found during enrollment", student_id)
        raise NotFoundError("Student not found.")
    return student


def _require_coverage(session: Session, action: CourseAction, student_id: int) -> None:
    missing = missing_module_ids(session, action)
    if missing:
        log.warning(
            "Action %s has modules without assigned teachers %s. Cannot enroll student %s.",
            action.id, missing, student_id,
        )
        raise ValidationError(MISSING_TEACHER)


def admit_enrollment(session: Session, action_id: int, student_id: int) -> ActionEnrollment:
    """Enroll a student in a fully staffed action.

    Checks run in order: action exists, student exists, every module has a
    teacher, no existing enrollment. The unique constraint on
    (action_id, student_id) backs the duplicate check under races.
    """
    action = session.get(CourseAction, action_id)
    if not action:
        log.warning("Action %s not found during enrollment", action_id)
        raise NotFoundError("Action not found.")
    student = _require_student(session, student_id)
    _require_coverage(session, action, student_id)

    duplicate = session.exec(select(ActionEnrollment).where(
        ActionEnrollment.action_id == action_id,
        ActionEnrollment.student_id == student_id,
    )).first()
    if duplicate:
        log.warning("Student %s is already enrolled in action %s", student_id, action_id)
        raise ConflictError(ALREADY_ENROLLED)

    enrollment = ActionEnrollment(action=action, student=student)
    session.add(enrollment)
    commit(session, conflict_message=ALREADY_ENROLLED, failure_message="Error creating enrollment.")
    session.refresh(enrollment)
    log.info("Student %s enrolled on action %s", student_id, action_id)
    return enrollment


def admit_mt_enrollment(session: Session, module_teaching_id: int, student_id: int) -> MTEnrollment:
    """Teacher-facing variant, scoped to one teaching assignment."""
    teaching = session.get(ModuleTeaching, module_teaching_id)
    if not teaching:
        log.warning("Teaching assignment %s not found during enrollment", module_teaching_id)
        raise NotFoundError("Teaching assignment not found.")
    student = _require_student(session, student_id)
    _require_coverage(session, teaching.action, student_id)

    duplicate = session.exec(select(MTEnrollment).where(
        MTEnrollment.module_teaching_id == module_teaching_id,
        MTEnrollment.student_id == student_id,
    )).first()
    if duplicate:
        log.warning("Student %s is already enrolled in teaching %s", student_id, module_teaching_id)
        raise ConflictError("The student is already enrolled in this module.")

    enrollment = MTEnrollment(module_teaching=teaching, student=student)
    session.add(enrollment)
    commit(session,
           conflict_message="The student is already enrolled in this module.",
           failure_message="Error creating enrollment.")
    session.refresh(enrollment)
    return enrollment


def list_enrollments(session: Session, action_id: int) -> List[ActionEnrollment]:
    if not session.get(CourseAction, action_id):
        raise NotFoundError("Action not found.")
    return list(session.exec(
        select(ActionEnrollment).where(ActionEnrollment.action_id == action_id).order_by(ActionEnrollment.id)
    ).all())


def remove_enrollment(session: Session, enrollment_id: int) -> None:
    enrollment = session.get(ActionEnrollment, enrollment_id)
    if not enrollment:
        raise NotFoundError("Enrollment not found.")
    session.delete(enrollment)
    commit(session, conflict_message="Conflicting enrollment.", failure_message="Error removing enrollment.")
    log.info("Enrollment %s removed", enrollment_id)
