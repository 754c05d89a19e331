from typing import List
from fastapi import APIRouter, Depends
from sqlmodel import Session
from ..db import get_session
from ..schemas.attendance import ParticipationRead, RecordAttendance, RosterResult, UpsertSessionAttendance
from ..services import attendance_service

router = APIRouter()


@router.post("/", status_code=201)
def record_attendance(data: RecordAttendance, session: Session = Depends(get_session)) -> ParticipationRead:
    record = attendance_service.record_attendance(
        session, data.session_id, data.action_enrollment_id, data.presence, data.attendance
    )
    return ParticipationRead.model_validate(record)


@router.put("/sessions/{session_id}")
def upsert_session_roster(session_id: int, data: UpsertSessionAttendance, session: Session = Depends(get_session)) -> RosterResult:
    outcome = attendance_service.upsert_session_roster(session, session_id, data.students)
    return RosterResult(
        records=[ParticipationRead.model_validate(r) for r in outcome.records],
        skipped=outcome.skipped,
    )


@router.get("/sessions/{session_id}")
def session_attendance(session_id: int, session: Session = Depends(get_session)) -> List[ParticipationRead]:
    return [ParticipationRead.model_validate(r) for r in attendance_service.participations_for_session(session, session_id)]


@router.get("/actions/{action_id}")
def action_attendance(action_id: int, session: Session = Depends(get_session)) -> List[ParticipationRead]:
    return [ParticipationRead.model_validate(r) for r in attendance_service.participations_for_action(session, action_id)]
