from typing import Any, Dict, Optional
from pydantic import Field, field_validator
from app.db.base import Base

class IntegrationCreate(Base):
    platform: str = Field(min_length=1, max_length=40)
    config: Optional[Dict[str, Any]] = None
    enabled: Optional[bool] = None

class IntegrationUpdate(Base):
    platform: Optional[str] = Field(default=None, min_length=1, max_length=40)
    config: Optional[Dict[str, Any]] = None
    enabled: Optional[bool] = None

    @field_validator("platform", "config", "enabled")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("may not be null")
        return v
