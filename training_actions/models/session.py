from typing import List, Optional, TYPE_CHECKING
from datetime import date, datetime, time, timedelta
from sqlmodel import Field, SQLModel, Relationship
from sqlalchemy import UniqueConstraint
from ..utils import utcnow
from .enums import PresenceEnum, WeekDay

if TYPE_CHECKING:
    from .action import ModuleTeaching
    from .enrollment import ActionEnrollment


class TrainingSession(SQLModel, table=True):
    __tablename__ = "sessions"

    id: Optional[int] = Field(default=None, primary_key=True)
    module_teaching_id: int = Field(foreign_key="module_teachings.id", index=True)
    weekday: WeekDay
    scheduled_date: date = Field(index=True)
    start: time
    duration_hours: float = Field(gt=0)
    teacher_presence: PresenceEnum = Field(default=PresenceEnum.UNKNOWN)
    note: str = ""
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    module_teaching: "ModuleTeaching" = Relationship(back_populates="sessions")
    participations: List["SessionParticipation"] = Relationship(
        back_populates="session", sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )

    @property
    def end(self) -> time:
        started = datetime.combine(self.scheduled_date, self.start)
        return (started + timedelta(hours=self.duration_hours)).time()

    @property
    def time_span(self) -> str:
        return f"{self.start:%H:%M} - {self.end:%H:%M}"


class SessionParticipation(SQLModel, table=True):
    """Attendance record of one enrolled student in one session."""
    __tablename__ = "session_participations"
    __table_args__ = (
        UniqueConstraint("session_id", "action_enrollment_id", name="uq_session_participation"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    session_id: int = Field(foreign_key="sessions.id", index=True)
    action_enrollment_id: int = Field(foreign_key="action_enrollments.id", index=True)
    presence: PresenceEnum = Field(default=PresenceEnum.UNKNOWN)
    attendance: float = Field(default=0.0, ge=0)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    session: "TrainingSession" = Relationship(back_populates="participations")
    enrollment: "ActionEnrollment" = Relationship(back_populates="participations")
