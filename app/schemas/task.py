"""Task schemas for the Kanban API."""
from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class TaskCreate(BaseModel):
    """Schema for creating a task. Field rules are enforced by TaskValidator."""
    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[str] = None  # ISO date or datetime string
    reminder_date: Optional[str] = None  # ISO date or datetime string
    priority: Optional[str] = None  # low, medium, high


class TaskUpdate(BaseModel):
    """Schema for a full-replace task update."""
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None  # todo, in-progress, done
    due_date: Optional[str] = None
    reminder_date: Optional[str] = None
    priority: Optional[str] = None


class TaskResponse(BaseModel):
    """Schema for task API responses. The owner id is not exposed."""
    id: int
    title: str
    description: str
    status: str
    priority: str
    due_date: Optional[datetime] = None
    reminder_date: Optional[datetime] = None
    is_reminder_sent: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
