from fastapi import APIRouter, Depends
from sqlmodel import Session
from ..db import get_session
from ..schemas.course import CategoryCreate, CategoryRead, CourseCreate, CourseModules, CourseRead, ModuleRead
from ..services import course_service

router = APIRouter()


def _course_read(course) -> CourseRead:
    return CourseRead(
        id=course.id,
        title=course.title,
        total_duration=course.total_duration,
        current_duration=course.current_duration,
        remaining_duration=course.remaining_duration,
        status=course.status.value,
        modules=[ModuleRead.model_validate(m) for m in course.modules],
    )


@router.post("/", status_code=201)
def create_course(data: CourseCreate, session: Session = Depends(get_session)) -> CourseRead:
    course = course_service.create_course(
        session, data.title, data.total_duration, data.module_ids, data.status, data.area
    )
    return _course_read(course)


@router.post("/{course_id}/modules/{module_id}")
def assign_module(course_id: int, module_id: int, session: Session = Depends(get_session)) -> CourseRead:
    return _course_read(course_service.assign_module(session, course_id, module_id))


@router.put("/{course_id}/modules")
def set_modules(course_id: int, data: CourseModules, session: Session = Depends(get_session)) -> CourseRead:
    return _course_read(course_service.set_course_modules(session, course_id, data.module_ids))


@router.post("/categories", status_code=201)
def create_category(data: CategoryCreate, session: Session = Depends(get_session)) -> CategoryRead:
    return CategoryRead.model_validate(course_service.create_category(session, data.name, data.shorten_name))
