from typing import List
from fastapi import APIRouter, Depends, Response
from sqlmodel import Session
from ..db import get_session
from ..schemas.enrollment import EnrollmentCreate, EnrollmentRead, MTEnrollmentCreate, MTEnrollmentRead
from ..services import enrollment_service

router = APIRouter()


@router.post("/", status_code=201)
def admit_enrollment(data: EnrollmentCreate, session: Session = Depends(get_session)) -> EnrollmentRead:
    enrollment = enrollment_service.admit_enrollment(session, data.action_id, data.student_id)
    return EnrollmentRead.model_validate(enrollment)


@router.post("/module-teaching", status_code=201)
def admit_mt_enrollment(data: MTEnrollmentCreate, session: Session = Depends(get_session)) -> MTEnrollmentRead:
    enrollment = enrollment_service.admit_mt_enrollment(session, data.module_teaching_id, data.student_id)
    return MTEnrollmentRead.model_validate(enrollment)


@router.get("/action/{action_id}")
def list_enrollments(action_id: int, session: Session = Depends(get_session)) -> List[EnrollmentRead]:
    return [EnrollmentRead.model_validate(e) for e in enrollment_service.list_enrollments(session, action_id)]


@router.delete("/{enrollment_id}", status_code=204)
def remove_enrollment(enrollment_id: int, session: Session = Depends(get_session)):
    enrollment_service.remove_enrollment(session, enrollment_id)
    return Response(status_code=204)
