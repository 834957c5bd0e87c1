"""Task service for the Kanban board."""
from datetime import timedelta
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm.exc import ObjectDeletedError, StaleDataError
from sqlmodel import Session, select

from app.config import DUE_SOON_HOURS
from app.exceptions import NotFound, StoreFailure
from app.models.task import Task
from app.services.task_validator import TaskValidator
from app.utils.dates import utcnow
from app.utils.logger import get_logger

logger = get_logger(__name__)


class TaskService:
    """Owner-scoped task CRUD plus the due-soon and reminder queries."""

    def __init__(self, session: Session):
        self.session = session

    def _fail(self, operation: str, error: SQLAlchemyError, **context) -> StoreFailure:
        self.session.rollback()
        logger.exception(f"Store failure during {operation}", error=str(error), **context)
        return StoreFailure()

    def get_by_id(self, task_id: int, user_id: int) -> Optional[Task]:
        """Get a specific task by ID, ensuring user ownership."""
        statement = (
            select(Task)
            .where(Task.id == task_id)
            .where(Task.user_id == user_id)
        )
        return self.session.exec(statement).first()

    def list_tasks(self, user_id: int) -> List[Task]:
        """All tasks of a user in creation order."""
        statement = select(Task).where(Task.user_id == user_id).order_by(Task.id.asc())
        try:
            return list(self.session.exec(statement).all())
        except SQLAlchemyError as e:
            raise self._fail("list_tasks", e, user_id=user_id)

    def create_task(
        self,
        user_id: int,
        title: Optional[str],
        description: Optional[str] = None,
        due_date: Optional[str] = None,
        reminder_date: Optional[str] = None,
        priority: Optional[str] = None,
    ) -> Task:
        """Create a new task in the ``todo`` column."""
        fields = TaskValidator.validate_create(
            title=title,
            description=description,
            due_date=due_date,
            reminder_date=reminder_date,
            priority=priority,
        )

        now = utcnow()
        task = Task(
            user_id=user_id,
            title=fields.title,
            description=fields.description,
            status="todo",
            priority=fields.priority,
            due_date=fields.due_date,
            reminder_date=fields.reminder_date,
            is_reminder_sent=False,
            created_at=now,
            updated_at=now,
        )

        try:
            self.session.add(task)
            self.session.commit()
            self.session.refresh(task)
        except SQLAlchemyError as e:
            raise self._fail("create_task", e, user_id=user_id)

        logger.info("Task created", user_id=user_id, task_id=task.id)
        return task

    def update_task(
        self,
        task_id: int,
        user_id: int,
        title: Optional[str],
        status: Optional[str],
        description: Optional[str] = None,
        due_date: Optional[str] = None,
        reminder_date: Optional[str] = None,
        priority: Optional[str] = None,
    ) -> Task:
        """
        Replace every mutable field of a task.

        All field validation happens before the ownership lookup, so a bad
        payload is reported as a validation error even for a task the caller
        does not own.

        Raises:
            ValidationError: first failing field rule
            NotFound: task missing, owned by someone else, or deleted concurrently
        """
        fields = TaskValidator.validate_update(
            title=title,
            status=status,
            description=description,
            due_date=due_date,
            reminder_date=reminder_date,
            priority=priority,
        )

        try:
            task = self.get_by_id(task_id, user_id)
            if task is None:
                raise NotFound()

            task.title = fields.title
            task.description = fields.description
            task.status = fields.status
            task.due_date = fields.due_date
            task.reminder_date = fields.reminder_date
            task.priority = fields.priority
            task.updated_at = utcnow()
            self.session.add(task)
            self.session.commit()
            self.session.refresh(task)
        except (StaleDataError, ObjectDeletedError):
            # Deleted between the ownership check and the write
            self.session.rollback()
            raise NotFound()
        except SQLAlchemyError as e:
            raise self._fail("update_task", e, user_id=user_id, task_id=task_id)

        logger.info("Task updated", user_id=user_id, task_id=task_id, status=fields.status)
        return task

    def delete_task(self, task_id: int, user_id: int) -> None:
        """Delete a task, ensuring user ownership."""
        try:
            task = self.get_by_id(task_id, user_id)
            if task is None:
                raise NotFound()
            self.session.delete(task)
            self.session.commit()
        except SQLAlchemyError as e:
            raise self._fail("delete_task", e, user_id=user_id, task_id=task_id)

        logger.info("Task deleted", user_id=user_id, task_id=task_id)

    def list_due_soon(self, user_id: int) -> List[Task]:
        """Open tasks due within the next DUE_SOON_HOURS (inclusive window)."""
        now = utcnow()
        horizon = now + timedelta(hours=DUE_SOON_HOURS)
        statement = (
            select(Task)
            .where(Task.user_id == user_id)
            .where(Task.due_date.is_not(None))
            .where(Task.due_date >= now)
            .where(Task.due_date <= horizon)
            .where(Task.status != "done")
            .order_by(Task.due_date.asc())
        )
        try:
            return list(self.session.exec(statement).all())
        except SQLAlchemyError as e:
            raise self._fail("list_due_soon", e, user_id=user_id)

    def list_pending_reminders(self, user_id: int) -> List[Task]:
        """Open tasks whose reminder time has passed and has not been sent."""
        statement = (
            select(Task)
            .where(Task.user_id == user_id)
            .where(Task.reminder_date.is_not(None))
            .where(Task.reminder_date <= utcnow())
            .where(Task.is_reminder_sent == False)  # noqa: E712
            .where(Task.status != "done")
            .order_by(Task.reminder_date.asc())
        )
        try:
            return list(self.session.exec(statement).all())
        except SQLAlchemyError as e:
            raise self._fail("list_pending_reminders", e, user_id=user_id)

    def mark_reminder_sent(self, task_id: int, user_id: int) -> Task:
        """Flag the task's reminder as delivered. Calling it again is a no-op."""
        try:
            task = self.get_by_id(task_id, user_id)
            if task is None:
                raise NotFound()
            task.is_reminder_sent = True
            self.session.add(task)
            self.session.commit()
            self.session.refresh(task)
        except (StaleDataError, ObjectDeletedError):
            # Deleted between the ownership check and the write
            self.session.rollback()
            raise NotFound()
        except SQLAlchemyError as e:
            raise self._fail("mark_reminder_sent", e, user_id=user_id, task_id=task_id)

        logger.info("Reminder marked as sent", user_id=user_id, task_id=task_id)
        return task
