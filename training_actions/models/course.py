from typing import List, Optional, TYPE_CHECKING
from datetime import datetime
from sqlmodel import Field, SQLModel, Relationship
from ..utils import utcnow
from .enums import StatusEnum
from .link_models import CourseModuleLink, ModuleCategoryLink

if TYPE_CHECKING:
    from .action import CourseAction, ModuleTeaching


class ModuleCategory(SQLModel, table=True):
    __tablename__ = "module_categories"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    shorten_name: str = Field(unique=True, index=True)

    modules: List["Module"] = Relationship(back_populates="categories", link_model=ModuleCategoryLink)


class Module(SQLModel, table=True):
    __tablename__ = "modules"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    hours: float = Field(default=0.0, ge=0)
    is_active: bool = True
    created_at: datetime = Field(default_factory=utcnow)

    courses: List["Course"] = Relationship(back_populates="modules", link_model=CourseModuleLink)
    categories: List["ModuleCategory"] = Relationship(
        back_populates="modules",
        link_model=ModuleCategoryLink,
        sa_relationship_kwargs={"order_by": "ModuleCategory.id"},
    )
    teachings: List["ModuleTeaching"] = Relationship(back_populates="module")

    @property
    def category_key(self) -> Optional[str]:
        """Payment-report column for this module: its first category."""
        if not self.categories:
            return None
        return self.categories[0].shorten_name


class Course(SQLModel, table=True):
    __tablename__ = "courses"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(unique=True, index=True)
    area: str = ""
    total_duration: float = Field(ge=0)
    status: StatusEnum = Field(default=StatusEnum.NOT_STARTED)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    modules: List["Module"] = Relationship(
        back_populates="courses",
        link_model=CourseModuleLink,
        sa_relationship_kwargs={"order_by": "Module.id"},
    )
    actions: List["CourseAction"] = Relationship(back_populates="course")

    @property
    def current_duration(self) -> float:
        return sum(m.hours for m in self.modules)

    @property
    def remaining_duration(self) -> float:
        return self.total_duration - self.current_duration

    @property
    def is_active(self) -> bool:
        return self.status.is_active
