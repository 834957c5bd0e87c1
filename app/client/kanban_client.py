"""HTTP client for the Kanban API, holding one board session."""
from typing import Any, Dict, List, Optional

import httpx

from app.client.reminder_monitor import ReminderMonitor
from app.config import REMINDER_POLL_SECONDS
from app.models.task import TASK_STATUSES
from app.schemas.task import TaskResponse
from app.services.notification_evaluator import NotificationBoard, evaluate
from app.utils.logger import get_logger

logger = get_logger(__name__)


class ApiError(Exception):
    """Error response from the API; ``message`` is the server's ``msg`` verbatim."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


def _iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


class KanbanClient:
    """
    Board session over an ``httpx.Client``.

    Keeps the token, the last fetched task snapshot and the notification
    working set. Every successful fetch re-derives notifications; an
    optional ReminderMonitor re-derives them on a timer.
    """

    def __init__(self, http: httpx.Client):
        self.http = http
        self.token: Optional[str] = None
        self.user: Optional[Dict[str, Any]] = None
        self.tasks: List[TaskResponse] = []
        self.notifications = NotificationBoard()
        self._monitor: Optional[ReminderMonitor] = None

    @classmethod
    def connect(cls, base_url: str, timeout: float = 10.0) -> "KanbanClient":
        return cls(httpx.Client(base_url=base_url, timeout=timeout))

    @property
    def authenticated(self) -> bool:
        return self.token is not None

    def _request(self, method: str, path: str, json: Optional[dict] = None, auth: bool = True) -> httpx.Response:
        headers = {}
        if auth and self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        response = self.http.request(method, path, json=json, headers=headers)
        if response.status_code >= 400:
            try:
                message = response.json().get("msg") or response.reason_phrase
            except ValueError:
                message = response.reason_phrase
            raise ApiError(response.status_code, message)
        return response

    def _replace_cached(self, task: TaskResponse) -> None:
        for index, cached in enumerate(self.tasks):
            if cached.id == task.id:
                self.tasks[index] = task
                return
        self.tasks.append(task)

    def _cached(self, task_id: int) -> TaskResponse:
        for task in self.tasks:
            if task.id == task_id:
                return task
        raise ApiError(404, "task not found")

    # --- Session ---

    def register(self, email: str, password: str) -> Dict[str, Any]:
        return self._request("POST", "/api/auth/register", {"email": email, "password": password}, auth=False).json()

    def login(self, email: str, password: str) -> Dict[str, Any]:
        data = self._request("POST", "/api/auth/login", {"email": email, "password": password}, auth=False).json()
        self.token = data["token"]
        self.user = data["user"]
        logger.info("Logged in", user_id=self.user["id"])
        return self.user

    def logout(self) -> None:
        """End the session: drop the token, the snapshot and the notifications."""
        if self._monitor is not None:
            self._monitor.cancel()
            self._monitor = None
        self.token = None
        self.user = None
        self.tasks = []
        self.notifications.clear()

    def start_monitor(self, interval: float = REMINDER_POLL_SECONDS) -> ReminderMonitor:
        """Start periodic re-evaluation on the running event loop."""
        if not self.authenticated:
            raise RuntimeError("login before starting the reminder monitor")
        if self._monitor is None:
            self._monitor = ReminderMonitor(lambda: self.tasks, self.notifications, interval=interval)
        self._monitor.start()
        return self._monitor

    # --- Tasks ---

    def fetch_tasks(self) -> List[TaskResponse]:
        """
        Reload the snapshot and re-derive notifications.

        A 403 means the token is no longer valid and ends the session.
        """
        try:
            payload = self._request("GET", "/api/tasks").json()
        except ApiError as e:
            if e.status_code == 403:
                logger.info("Token rejected, logging out")
                self.logout()
            raise
        self.tasks = [TaskResponse.model_validate(item) for item in payload]
        self.notifications.add_all(evaluate(self.tasks))
        return self.tasks

    def create_task(
        self,
        title: str,
        description: Optional[str] = None,
        due_date: Optional[str] = None,
        reminder_date: Optional[str] = None,
        priority: Optional[str] = None,
    ) -> TaskResponse:
        body = {
            "title": title,
            "description": description,
            "due_date": due_date,
            "reminder_date": reminder_date,
            "priority": priority,
        }
        task = TaskResponse.model_validate(self._request("POST", "/api/tasks", body).json())
        self.tasks.append(task)
        return task

    def update_task(self, task_id: int, **fields) -> TaskResponse:
        """Full-replace update; ``fields`` is the complete PUT body."""
        task = TaskResponse.model_validate(self._request("PUT", f"/api/tasks/{task_id}", fields).json())
        self._replace_cached(task)
        return task

    def move_task(self, task_id: int, status: str) -> TaskResponse:
        """Move a card to another column, resending every other field unchanged."""
        current = self._cached(task_id)
        return self.update_task(
            task_id,
            title=current.title,
            description=current.description,
            status=status,
            due_date=_iso(current.due_date),
            reminder_date=_iso(current.reminder_date),
            priority=current.priority,
        )

    def delete_task(self, task_id: int) -> None:
        self._request("DELETE", f"/api/tasks/{task_id}")
        self.tasks = [task for task in self.tasks if task.id != task_id]

    def due_soon(self) -> List[TaskResponse]:
        return [TaskResponse.model_validate(item) for item in self._request("GET", "/api/tasks/due-soon").json()]

    def pending_reminders(self) -> List[TaskResponse]:
        return [TaskResponse.model_validate(item) for item in self._request("GET", "/api/tasks/reminders").json()]

    def mark_reminder_sent(self, task_id: int) -> TaskResponse:
        task = TaskResponse.model_validate(
            self._request("POST", f"/api/tasks/{task_id}/mark-reminder-sent").json()
        )
        self._replace_cached(task)
        return task

    # --- Board ---

    def columns(self) -> Dict[str, List[TaskResponse]]:
        """Group the snapshot into the three status columns."""
        board = {status: [] for status in TASK_STATUSES}
        for task in self.tasks:
            board.setdefault(task.status, []).append(task)
        return board

    def dismiss(self, task_id: int, category: str) -> bool:
        return self.notifications.dismiss(task_id, category)
