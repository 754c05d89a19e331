from typing import List, Optional, TYPE_CHECKING
from datetime import date, datetime
from sqlmodel import Field, SQLModel, Relationship
from sqlalchemy import Column, JSON, UniqueConstraint, CheckConstraint
from ..utils import utcnow
from .enums import PresenceEnum, RegimentType, StatusEnum

if TYPE_CHECKING:
    from .course import Course, Module
    from .people import User, Teacher
    from .session import TrainingSession
    from .enrollment import ActionEnrollment, MTEnrollment


class CourseAction(SQLModel, table=True):
    __tablename__ = "course_actions"
    __table_args__ = (
        CheckConstraint("start_date < end_date", name="ck_action_dates"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    course_id: int = Field(foreign_key="courses.id", index=True)
    coordinator_id: int = Field(foreign_key="users.id", index=True)
    action_number: int = 1
    administration_code: str = Field(unique=True, index=True)
    locality: str = ""
    address: Optional[str] = None
    # Stored as WeekDay values.
    week_days: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    start_date: date
    end_date: date
    status: StatusEnum = Field(default=StatusEnum.NOT_STARTED)
    regiment: RegimentType = Field(default=RegimentType.HYBRID)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    course: "Course" = Relationship(back_populates="actions")
    coordinator: "User" = Relationship(back_populates="coordinated_actions")
    module_teachings: List["ModuleTeaching"] = Relationship(
        back_populates="action", sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "ModuleTeaching.id"}
    )
    enrollments: List["ActionEnrollment"] = Relationship(
        back_populates="action", sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "ActionEnrollment.id"}
    )

    @property
    def title(self) -> str:
        return f"{self.action_number} - {self.locality}"

    @property
    def is_active(self) -> bool:
        return self.status.is_active

    @property
    def all_payments_processed(self) -> bool:
        return all(mt.payment_processed for mt in self.module_teachings)


class ModuleTeaching(SQLModel, table=True):
    """Teaching assignment: one teacher teaching one module within one action."""
    __tablename__ = "module_teachings"
    __table_args__ = (
        UniqueConstraint("action_id", "module_id", name="uq_module_teaching"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    action_id: int = Field(foreign_key="course_actions.id", index=True)
    module_id: int = Field(foreign_key="modules.id", index=True)
    teacher_id: int = Field(foreign_key="teachers.id", index=True)
    payment_total: float = 0.0
    payment_date: Optional[date] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    action: "CourseAction" = Relationship(back_populates="module_teachings")
    module: "Module" = Relationship(back_populates="teachings")
    teacher: "Teacher" = Relationship(back_populates="teachings")
    sessions: List["TrainingSession"] = Relationship(
        back_populates="module_teaching",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "TrainingSession.scheduled_date"},
    )
    mt_enrollments: List["MTEnrollment"] = Relationship(
        back_populates="module_teaching", sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )

    @property
    def payment_processed(self) -> bool:
        return self.payment_date is not None

    @property
    def scheduled_hours(self) -> float:
        return sum(s.duration_hours for s in self.sessions)

    @property
    def lectured_hours(self) -> float:
        return sum(s.duration_hours for s in self.sessions if s.teacher_presence == PresenceEnum.PRESENT)
