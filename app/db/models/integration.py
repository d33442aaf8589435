from datetime import datetime
from typing import Any, Dict, Optional
from pydantic import Field
from app.db.base import Base

class Integration(Base):
    id: str
    bot_id: str
    platform: str                    # whatsapp | telegram | messenger | instagram | payment | scheduling
    config: Dict[str, Any] = Field(default_factory=dict)
    enabled: bool = False
    connected_at: Optional[datetime] = None
