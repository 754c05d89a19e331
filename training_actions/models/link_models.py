from sqlmodel import Field, SQLModel


class CourseModuleLink(SQLModel, table=True):
    __tablename__ = "course_modules"
    course_id: int = Field(foreign_key="courses.id", primary_key=True)
    module_id: int = Field(foreign_key="modules.id", primary_key=True)


class ModuleCategoryLink(SQLModel, table=True):
    __tablename__ = "module_category_links"
    module_id: int = Field(foreign_key="modules.id", primary_key=True)
    category_id: int = Field(foreign_key="module_categories.id", primary_key=True)
