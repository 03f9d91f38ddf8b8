import uuid

from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from task_api.database import Base

class User(Base):
    __tablename__ = "users"

    user_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # Unique index is the source of truth for username uniqueness
    username = Column(String(50), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
