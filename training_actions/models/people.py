from typing import List, Optional, TYPE_CHECKING
from datetime import datetime
from sqlmodel import Field, SQLModel, Relationship
from ..utils import utcnow

if TYPE_CHECKING:
    from .action import CourseAction, ModuleTeaching
    from .enrollment import ActionEnrollment, MTEnrollment


class User(SQLModel, table=True):
    """Staff account; coordinates training actions."""
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True)
    first_name: str
    last_name: str
    role: str = "coordinator"
    is_active: bool = True
    created_at: datetime = Field(default_factory=utcnow)

    coordinated_actions: List["CourseAction"] = Relationship(back_populates="coordinator")

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"


class Student(SQLModel, table=True):
    __tablename__ = "students"

    id: Optional[int] = Field(default=None, primary_key=True)
    first_name: str
    last_name: str
    iban: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)

    enrollments: List["ActionEnrollment"] = Relationship(back_populates="student")
    mt_enrollments: List["MTEnrollment"] = Relationship(back_populates="student")

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"


class Teacher(SQLModel, table=True):
    __tablename__ = "teachers"

    id: Optional[int] = Field(default=None, primary_key=True)
    first_name: str
    last_name: str
    created_at: datetime = Field(default_factory=utcnow)

    teachings: List["ModuleTeaching"] = Relationship(back_populates="teacher")

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"
