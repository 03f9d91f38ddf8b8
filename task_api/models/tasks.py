import uuid

from sqlalchemy import Column, String, Text, Date, DateTime
from sqlalchemy.sql import func
from task_api.database import Base


class Task(Base):
    __tablename__ = "tasks"

    task_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    task = Column(Text, nullable=False)
    due_date = Column(Date, nullable=False)
    status = Column(String(50), nullable=False)
    priority = Column(String(50), nullable=False)
    # Owner identifier, not a foreign key to users
    created_by = Column(String(36), index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
