"""Task model for SQLModel."""
from datetime import datetime
from typing import Optional

from sqlalchemy import Column, DateTime, Text
from sqlmodel import SQLModel, Field

from app.utils.dates import utcnow

TASK_STATUSES = ("todo", "in-progress", "done")
TASK_PRIORITIES = ("low", "medium", "high")


class Task(SQLModel, table=True):
    """Task entity representing a card on the Kanban board."""

    __tablename__ = "tasks"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(max_length=255)
    description: str = Field(default="", sa_column=Column(Text, nullable=False, default=""))
    user_id: int = Field(foreign_key="users.id", index=True)
    status: str = Field(default="todo", max_length=20)  # todo, in-progress, done
    priority: str = Field(default="medium", max_length=20)  # low, medium, high
    # Naive UTC timestamps
    due_date: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=False))
    reminder_date: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=False))
    is_reminder_sent: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=False))
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=False))
