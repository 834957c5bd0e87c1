"""
Domain exceptions for the Kanban API.

Services raise these; the handler registered in ``app.main`` renders every
one of them as ``{"msg": <message>}`` with the exception's status code.
"""

from typing import Any, Optional


class KanbanError(Exception):
    """Base exception for all Kanban API errors."""

    status_code = 500
    default_message = "server error"

    def __init__(self, message: Optional[str] = None, details: Optional[dict[str, Any]] = None):
        self.message = message or self.default_message
        super().__init__(self.message)
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to the client-facing error body."""
        return {"msg": self.message}


class ValidationError(KanbanError):
    """Malformed or missing client input."""

    status_code = 400
    default_message = "invalid request"


class InvalidCredentials(KanbanError):
    """Unknown email or wrong password. Both cases share one message."""

    status_code = 400
    default_message = "invalid email or password"


class Unauthenticated(KanbanError):
    """No bearer token presented."""

    status_code = 401
    default_message = "authentication required"


class InvalidToken(KanbanError):
    """Bearer token present but malformed, forged or expired."""

    status_code = 403
    default_message = "invalid or expired token"


class NotFound(KanbanError):
    """Resource absent or owned by another user."""

    status_code = 404
    default_message = "task not found"


class StoreFailure(KanbanError):
    """Persistence-layer fault. Details go to the logs, never to the client."""

    status_code = 500
    default_message = "server error"
