from fastapi import APIRouter, Depends, Response
from sqlmodel import Session
from ..db import get_session
from ..schemas.course import (
    ActionCreate, ActionRead, ModuleRead, ModuleTeachingRead, StaffingRead, TeacherAssignment,
)
from ..services import action_service, coverage

router = APIRouter()


def _action_read(action) -> ActionRead:
    return ActionRead(
        id=action.id,
        course_id=action.course_id,
        coordinator_id=action.coordinator_id,
        title=action.title,
        administration_code=action.administration_code,
        start_date=action.start_date,
        end_date=action.end_date,
        status=action.status.value,
        regiment=action.regiment.value,
    )


@router.post("/", status_code=201)
def create_action(data: ActionCreate, session: Session = Depends(get_session)) -> ActionRead:
    action = action_service.create_action(session, **data.model_dump())
    return _action_read(action)


@router.get("/{action_id}/staffing")
def get_staffing(action_id: int, session: Session = Depends(get_session)) -> StaffingRead:
    action = action_service.get_action(session, action_id)
    missing = coverage.modules_without_teacher(session, action)
    return StaffingRead(
        action_id=action.id,
        fully_staffed=not missing,
        modules_without_teacher=[ModuleRead.model_validate(m) for m in missing],
    )


@router.post("/{action_id}/teachings", status_code=201)
def assign_teacher(action_id: int, data: TeacherAssignment, session: Session = Depends(get_session)) -> ModuleTeachingRead:
    teaching = action_service.assign_teacher(session, action_id, data.module_id, data.teacher_id)
    return ModuleTeachingRead.model_validate(teaching)


@router.delete("/{action_id}", status_code=204)
def delete_action(action_id: int, session: Session = Depends(get_session)):
    action_service.delete_action(session, action_id)
    return Response(status_code=204)
