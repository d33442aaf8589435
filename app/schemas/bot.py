from typing import Optional
from pydantic import Field, field_validator
from app.db.base import Base
from app.db.models.bot import BotStatus

class BotCreate(Base):
    name: str = Field(min_length=1, max_length=80)
    description: Optional[str] = Field(default=None, max_length=2000)
    status: Optional[BotStatus] = None

class BotUpdate(Base):
    name: Optional[str] = Field(default=None, min_length=1, max_length=80)
    description: Optional[str] = Field(default=None, max_length=2000)
    status: Optional[BotStatus] = None

    # omitir el campo está bien; mandarlo en null no (description sí acepta null)
    @field_validator("name", "status")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("may not be null")
        return v
