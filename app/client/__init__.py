"""Board client package."""

from .kanban_client import ApiError, KanbanClient
from .reminder_monitor import ReminderMonitor

__all__ = ["ApiError", "KanbanClient", "ReminderMonitor"]
