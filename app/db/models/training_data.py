from datetime import datetime
from typing import Optional
from app.db.base import Base

class TrainingData(Base):
    id: str
    bot_id: str
    file_name: str
    file_url: str                    # referencia opaca al storage (/objects/...)
    file_size: int = 0
    file_type: str = "application/octet-stream"
    content: Optional[str] = None    # texto extraído; solo junto con processed=True
    processed: bool = False
    error: Optional[str] = None      # último error de ingesta
    uploaded_at: datetime
