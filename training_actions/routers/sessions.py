from fastapi import APIRouter, Depends, Response
from sqlmodel import Session
from ..db import get_session
from ..schemas.session import SessionCreate, SessionRead, TeacherPresenceUpdate
from ..services import session_service

router = APIRouter()


@router.post("/", status_code=201)
def schedule_session(data: SessionCreate, session: Session = Depends(get_session)) -> SessionRead:
    training_session = session_service.schedule_session(session, **data.model_dump())
    return SessionRead.model_validate(training_session)


@router.get("/{session_id}")
def get_session_detail(session_id: int, session: Session = Depends(get_session)) -> SessionRead:
    return SessionRead.model_validate(session_service.get_training_session(session, session_id))


@router.put("/{session_id}/teacher-presence")
def set_teacher_presence(session_id: int, data: TeacherPresenceUpdate, session: Session = Depends(get_session)) -> SessionRead:
    training_session = session_service.set_teacher_presence(session, session_id, data.presence)
    return SessionRead.model_validate(training_session)


@router.delete("/{session_id}", status_code=204)
def delete_session(session_id: int, session: Session = Depends(get_session)):
    session_service.delete_session(session, session_id)
    return Response(status_code=204)
