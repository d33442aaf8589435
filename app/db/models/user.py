from typing import Optional
from app.db.base import Base

class User(Base):
    id: str
    username: str
    password: Optional[str] = None
