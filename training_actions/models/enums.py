from enum import Enum
from typing import Type, TypeVar

from ..errors import ValidationError

E = TypeVar("E", bound=Enum)


class StatusEnum(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    @property
    def is_active(self) -> bool:
        return self in (StatusEnum.NOT_STARTED, StatusEnum.IN_PROGRESS)


class PresenceEnum(str, Enum):
    UNKNOWN = "UNKNOWN"
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    JUSTIFIED = "JUSTIFIED"


class RegimentType(str, Enum):
    ONLINE = "ONLINE"
    PRESENTIAL = "PRESENTIAL"
    HYBRID = "HYBRID"


class WeekDay(str, Enum):
    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"
    SATURDAY = "SATURDAY"
    SUNDAY = "SUNDAY"

    @classmethod
    def from_date(cls, d) -> "WeekDay":
        return list(cls)[d.weekday()]


def parse_enum(enum_cls: Type[E], raw, field: str) -> E:
    """Single entry point turning free-form input into an enum member.

    Accepts a member, its value or its name (case-insensitive, spaces and
    dashes treated as underscores). Anything else is a ValidationError.
    """
    if isinstance(raw, enum_cls):
        return raw
    if isinstance(raw, str):
        key = raw.strip().upper().replace(" ", "_").replace("-", "_")
        for member in enum_cls:
            if key in (member.value.upper(), member.name):
                return member
    raise ValidationError(f"Invalid {field} value: {raw!r}.")
