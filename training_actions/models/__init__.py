from .enums import StatusEnum, PresenceEnum, RegimentType, WeekDay, parse_enum
from .link_models import CourseModuleLink, ModuleCategoryLink
from .course import Course, Module, ModuleCategory
from .people import User, Student, Teacher
from .action import CourseAction, ModuleTeaching
from .session import TrainingSession, SessionParticipation
from .enrollment import ActionEnrollment, MTEnrollment
from .general_info import GeneralInfo

__all__ = [
    "StatusEnum", "PresenceEnum", "RegimentType", "WeekDay", "parse_enum",
    "CourseModuleLink", "ModuleCategoryLink",
    "Course", "Module", "ModuleCategory",
    "User", "Student", "Teacher",
    "CourseAction", "ModuleTeaching",
    "TrainingSession", "SessionParticipation",
    "ActionEnrollment", "MTEnrollment",
    "GeneralInfo",
]
