from typing import Optional
from pydantic import Field
from app.db.base import Base

# fileUrl/fileName se validan a mano en el endpoint (400, no 422)
class TrainingDataCreate(Base):
    file_url: Optional[str] = None
    file_name: Optional[str] = None
    file_size: Optional[int] = Field(default=None, ge=0)
    file_type: Optional[str] = None

class ReprocessOut(Base):
    id: str
    status: str
