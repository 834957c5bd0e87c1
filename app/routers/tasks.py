"""Task router for the Kanban API."""
from fastapi import APIRouter, Depends, Response, status
from typing import List
from sqlmodel import Session

from app.schemas.task import TaskCreate, TaskUpdate, TaskResponse
from app.services.task_service import TaskService
from app.middleware.auth import get_current_user, CurrentUser
from app.db.config import get_session
from app.utils.logger import get_logger

router = APIRouter(tags=["Tasks"])  # main.py mounts this under /api/tasks
logger = get_logger(__name__)


def get_task_service(session: Session = Depends(get_session)) -> TaskService:
    """Dependency for getting TaskService instance."""
    return TaskService(session)


@router.get("", response_model=List[TaskResponse])
async def list_tasks(
    current_user: CurrentUser = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """List the caller's tasks in creation order."""
    logger.debug("GET /api/tasks", user_id=current_user.id)
    return service.list_tasks(current_user.id)


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    task_data: TaskCreate,
    current_user: CurrentUser = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """Create a task in the todo column."""
    return service.create_task(
        user_id=current_user.id,
        title=task_data.title,
        description=task_data.description,
        due_date=task_data.due_date,
        reminder_date=task_data.reminder_date,
        priority=task_data.priority,
    )


# Fixed paths are registered before /{task_id} routes so they are matched first
@router.get("/due-soon", response_model=List[TaskResponse])
async def list_due_soon(
    current_user: CurrentUser = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """Open tasks due in the next 24 hours, earliest first."""
    return service.list_due_soon(current_user.id)


@router.get("/reminders", response_model=List[TaskResponse])
async def list_pending_reminders(
    current_user: CurrentUser = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """Open tasks with a reminder that is due and not yet sent."""
    return service.list_pending_reminders(current_user.id)


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: int,
    task_data: TaskUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """Replace all mutable fields of a task."""
    return service.update_task(
        task_id=task_id,
        user_id=current_user.id,
        title=task_data.title,
        status=task_data.status,
        description=task_data.description,
        due_date=task_data.due_date,
        reminder_date=task_data.reminder_date,
        priority=task_data.priority,
    )


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """Delete a task."""
    service.delete_task(task_id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{task_id}/mark-reminder-sent", response_model=TaskResponse)
async def mark_reminder_sent(
    task_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """Record that the task's reminder has been shown."""
    return service.mark_reminder_sent(task_id, current_user.id)
