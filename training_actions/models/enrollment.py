from typing import List, Optional, TYPE_CHECKING
from datetime import date, datetime
from sqlmodel import Field, SQLModel, Relationship
from sqlalchemy import UniqueConstraint
from ..utils import utcnow

if TYPE_CHECKING:
    from .action import CourseAction, ModuleTeaching
    from .people import Student
    from .session import SessionParticipation


class ActionEnrollment(SQLModel, table=True):
    __tablename__ = "action_enrollments"
    __table_args__ = (
        UniqueConstraint("action_id", "student_id", name="uq_action_enrollment"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    action_id: int = Field(foreign_key="course_actions.id", index=True)
    student_id: int = Field(foreign_key="students.id", index=True)
    evaluation: float = 0.0
    payment_total: float = 0.0
    payment_date: Optional[date] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    action: "CourseAction" = Relationship(back_populates="enrollments")
    student: "Student" = Relationship(back_populates="enrollments")
    participations: List["SessionParticipation"] = Relationship(
        back_populates="enrollment", sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )

    @property
    def approved(self) -> bool:
        return self.evaluation >= 3

    @property
    def payment_processed(self) -> bool:
        return self.payment_date is not None


class MTEnrollment(SQLModel, table=True):
    """Student enrollment scoped to a single teaching assignment."""
    __tablename__ = "mt_enrollments"
    __table_args__ = (
        UniqueConstraint("module_teaching_id", "student_id", name="uq_mt_enrollment"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    module_teaching_id: int = Field(foreign_key="module_teachings.id", index=True)
    student_id: int = Field(foreign_key="students.id", index=True)
    teacher_evaluation: float = 0.0
    created_at: datetime = Field(default_factory=utcnow)

    module_teaching: "ModuleTeaching" = Relationship(back_populates="mt_enrollments")
    student: "Student" = Relationship(back_populates="mt_enrollments")

    @property
    def approved(self) -> bool:
        return self.teacher_evaluation >= 3
