import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from sqlmodel import Session, select

from ..config import settings
from ..errors import ConflictError, NotFoundError, ValidationError
from ..models import (
    ActionEnrollment, ModuleTeaching, PresenceEnum, SessionParticipation, TrainingSession, parse_enum,
)
from ..schemas.attendance import SkippedEntry, StudentAttendance
from ..utils import utcnow
from .persistence import commit
from .session_service import get_training_session

log = logging.getLogger(__name__)

OVER_DURATION_POLICIES = ("allow", "warn", "reject")


@dataclass
class RosterOutcome:
    records: List[SessionParticipation] = field(default_factory=list)
    skipped: List[SkippedEntry] = field(default_factory=list)


def _over_duration_policy(policy: Optional[str]) -> str:
    policy = (policy or settings.ATTENDANCE_OVER_DURATION).lower()
    if policy not in OVER_DURATION_POLICIES:
        raise ValueError(f"Unknown attendance over-duration policy {policy!r}")
    return policy


def _check_hours(training_session: TrainingSession, enrollment_id: int, hours: float, policy: str) -> None:
    if hours < 0:
        raise ValidationError("Attendance hours must not be negative.")
    if hours <= training_session.duration_hours or policy == "allow":
        return
    if policy == "reject":
        raise ValidationError(
            f"Attendance of {hours:g}h exceeds the session duration of {training_session.duration_hours:g}h."
        )
    log.warning(
        "Enrollment %s credited %sh on session %s lasting %sh",
        enrollment_id, hours, training_session.id, training_session.duration_hours,
    )


def _action_id_of(training_session: TrainingSession) -> int:
    return training_session.module_teaching.action_id


def record_attendance(
    session: Session,
    session_id: int,
    enrollment_id: int,
    presence: str,
    hours: float,
    over_duration_policy: Optional[str] = None,
) -> SessionParticipation:
    """Create one attendance record. A second record for the pair is a Conflict."""
    training_session = get_training_session(session, session_id)
    enrollment = session.get(ActionEnrollment, enrollment_id)
    if not enrollment or enrollment.action_id != _action_id_of(training_session):
        log.warning("Enrollment %s not found in the action of session %s", enrollment_id, session_id)
        raise NotFoundError("Enrollment not found for this session's action.")

    parsed = parse_enum(PresenceEnum, presence, "presence")
    _check_hours(training_session, enrollment_id, hours, _over_duration_policy(over_duration_policy))

    existing = session.exec(select(SessionParticipation).where(
        SessionParticipation.session_id == session_id,
        SessionParticipation.action_enrollment_id == enrollment_id,
    )).first()
    if existing:
        log.warning("Attendance already recorded for enrollment %s on session %s", enrollment_id, session_id)
        raise ConflictError("Attendance already recorded for this student in this session.")

    record = SessionParticipation(
        session=training_session,
        enrollment=enrollment,
        presence=parsed,
        attendance=hours,
    )
    session.add(record)
    commit(session,
           conflict_message="Attendance already recorded for this student in this session.",
           failure_message="Error recording attendance.")
    session.refresh(record)
    return record


def upsert_session_roster(
    session: Session,
    session_id: int,
    roster: Iterable[StudentAttendance],
    over_duration_policy: Optional[str] = None,
) -> RosterOutcome:
    """Take (or retake) attendance for a whole session.

    Rows with an invalid presence, a bad hour value or an unknown enrollment
    are skipped and reported; every other row is updated in place or created.
    All writes are committed together, so a storage failure leaves nothing
    behind. Running the same roster twice yields the same records.
    """
    training_session = get_training_session(session, session_id)
    action_id = _action_id_of(training_session)
    policy = _over_duration_policy(over_duration_policy)

    existing: Dict[int, SessionParticipation] = {
        p.action_enrollment_id: p
        for p in session.exec(
            select(SessionParticipation).where(SessionParticipation.session_id == session_id)
        ).all()
    }
    outcome = RosterOutcome()
    touched: Dict[int, SessionParticipation] = {}

    # Lookups must not flush pending rows; the commit below is the only write.
    with session.no_autoflush:
        for entry in roster:
            try:
                presence = parse_enum(PresenceEnum, entry.presence, "presence")
                _check_hours(training_session, entry.action_enrollment_id, entry.attendance, policy)
            except ValidationError as exc:
                log.warning(
                    "Skipping attendance of %s (enrollment %s) on session %s: %s",
                    entry.student_name or "student", entry.action_enrollment_id, session_id, exc.message,
                )
                outcome.skipped.append(SkippedEntry(action_enrollment_id=entry.action_enrollment_id, reason=exc.message))
                continue

            record = existing.get(entry.action_enrollment_id)
            if record is not None:
                record.presence = presence
                record.attendance = entry.attendance
                record.updated_at = utcnow()
            else:
                enrollment = session.get(ActionEnrollment, entry.action_enrollment_id)
                if not enrollment or enrollment.action_id != action_id:
                    log.warning("Skipping unknown enrollment %s on session %s", entry.action_enrollment_id, session_id)
                    outcome.skipped.append(SkippedEntry(
                        action_enrollment_id=entry.action_enrollment_id, reason="Enrollment not found."
                    ))
                    continue
                record = SessionParticipation(
                    session=training_session,
                    enrollment=enrollment,
                    presence=presence,
                    attendance=entry.attendance,
                )
                session.add(record)
                existing[enrollment.id] = record

            touched[entry.action_enrollment_id] = record

    outcome.records = list(touched.values())
    commit(session,
           conflict_message="Attendance for this session was changed concurrently.",
           failure_message="Error processing session attendance.")
    for record in outcome.records:
        session.refresh(record)
    log.info(
        "Upserted attendance for %d students in session %s (%d skipped)",
        len(outcome.records), session_id, len(outcome.skipped),
    )
    return outcome


def participations_for_session(session: Session, session_id: int) -> List[SessionParticipation]:
    get_training_session(session, session_id)
    return list(session.exec(
        select(SessionParticipation)
        .where(SessionParticipation.session_id == session_id)
        .order_by(SessionParticipation.action_enrollment_id)
    ).all())


def participations_for_action(session: Session, action_id: int) -> List[SessionParticipation]:
    return list(session.exec(
        select(SessionParticipation)
        .join(TrainingSession, SessionParticipation.session_id == TrainingSession.id)
        .join(ModuleTeaching, TrainingSession.module_teaching_id == ModuleTeaching.id)
        .where(ModuleTeaching.action_id == action_id)
        .order_by(SessionParticipation.id)
    ).all())
