from typing import List

from sqlmodel import Session, select

from ..models import CourseAction, CourseModuleLink, Module, ModuleTeaching


def missing_module_ids(session: Session, action: CourseAction) -> List[int]:
    """Modules of the action's course with no teaching assignment in the action.

    Always queried fresh; assignments change during the life of an action.
    """
    course_modules = session.exec(
        select(CourseModuleLink.module_id).where(CourseModuleLink.course_id == action.course_id)
    ).all()
    taught = set(session.exec(
        select(ModuleTeaching.module_id).where(ModuleTeaching.action_id == action.id)
    ).all())
    return sorted(m for m in course_modules if m not in taught)


def modules_without_teacher(session: Session, action: CourseAction) -> List[Module]:
    ids = missing_module_ids(session, action)
    if not ids:
        return []
    return list(session.exec(select(Module).where(Module.id.in_(ids)).order_by(Module.id)).all())


def all_modules_covered(session: Session, action: CourseAction) -> bool:
    return not missing_module_ids(session, action)


is_action_fully_staffed = all_modules_covered
