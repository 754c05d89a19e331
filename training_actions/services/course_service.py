import logging
from typing import List, Optional

from sqlmodel import Session, select

from ..errors import ConflictError, NotFoundError, ValidationError
from ..models import Course, Module, ModuleCategory, StatusEnum, parse_enum
from ..utils import utcnow
from .duration_budget import budget_exceeded_error, can_add_module, check_module_list
from .persistence import commit

log = logging.getLogger(__name__)


def get_course(session: Session, course_id: int) -> Course:
    course = session.get(Course, course_id)
    if not course:
        log.warning("Course %s not found", course_id)
        raise NotFoundError("Course not found.")
    return course


def _load_modules(session: Session, module_ids: List[int]) -> List[Module]:
    if len(set(module_ids)) != len(module_ids):
        raise ValidationError("A module can only be assigned once to a course.")
    modules = []
    for module_id in module_ids:
        module = session.get(Module, module_id)
        if not module:
            log.warning("Module %s not found", module_id)
            raise NotFoundError(f"Module {module_id} not found.")
        if not module.is_active:
            raise ValidationError(f"Module {module.name} is not active.")
        modules.append(module)
    return modules


def create_course(
    session: Session,
    title: str,
    total_duration: float,
    module_ids: Optional[List[int]] = None,
    status: str = StatusEnum.NOT_STARTED.value,
    area: str = "",
) -> Course:
    if total_duration < 0:
        raise ValidationError("Total duration must not be negative.")
    exists = session.exec(select(Course).where(Course.title == title)).first()
    if exists:
        log.warning("Course title %r already in use", title)
        raise ConflictError("A course with the same title already exists.")

    modules = _load_modules(session, module_ids or [])
    check_module_list(total_duration, modules)

    course = Course(
        title=title,
        area=area,
        total_duration=total_duration,
        status=parse_enum(StatusEnum, status, "status"),
        modules=modules,
    )
    session.add(course)
    commit(session,
           conflict_message="A course with the same title already exists.",
           failure_message="Error creating course.")
    session.refresh(course)
    log.info("Course %s created with %d modules", course.id, len(modules))
    return course


def assign_module(session: Session, course_id: int, module_id: int) -> Course:
    course = get_course(session, course_id)
    module = session.get(Module, module_id)
    if not module:
        raise NotFoundError("Module not found.")
    if not module.is_active:
        log.warning("Module %s is not active", module_id)
        raise ValidationError("The given module is not active.")
    if not course.is_active:
        log.warning("Course %s is not active", course_id)
        raise ValidationError("Cannot assign a module to a completed or cancelled course.")
    if any(m.id == module.id for m in course.modules):
        raise ConflictError("The module is already assigned to the course.")

    running_total = course.current_duration
    if not can_add_module(running_total, module.hours, course.total_duration):
        log.warning("Total duration exceeded for course %s", course_id)
        raise budget_exceeded_error(module.hours, running_total, course.total_duration)

    course.modules.append(module)
    course.updated_at = utcnow()
    commit(session,
           conflict_message="The module is already assigned to the course.",
           failure_message="Error assigning module to course.")
    session.refresh(course)
    return course


def set_course_modules(session: Session, course_id: int, module_ids: List[int]) -> Course:
    """Replace the course's module list; the budget is re-checked from zero."""
    course = get_course(session, course_id)
    if not course.is_active:
        raise ValidationError("Cannot change modules of a completed or cancelled course.")
    modules = _load_modules(session, module_ids)
    check_module_list(course.total_duration, modules)

    course.modules = modules
    course.updated_at = utcnow()
    commit(session,
           conflict_message="Conflicting module assignment.",
           failure_message="Error updating course modules.")
    session.refresh(course)
    return course


def create_category(session: Session, name: str, shorten_name: str) -> ModuleCategory:
    category = ModuleCategory(name=name, shorten_name=shorten_name)
    session.add(category)
    commit(session,
           conflict_message="A category with the same short name already exists.",
           failure_message="Error creating category.")
    session.refresh(category)
    return category
