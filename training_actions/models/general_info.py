from typing import Optional
from datetime import datetime
from sqlmodel import Field, SQLModel
from ..utils import utcnow


class GeneralInfo(SQLModel, table=True):
    """Globally scoped configuration record holding the settlement rates."""
    __tablename__ = "general_info"

    id: Optional[int] = Field(default=None, primary_key=True)
    hour_value_teacher: float = 0.0
    hour_value_alimentation: float = 0.0
    updated_at: datetime = Field(default_factory=utcnow)
