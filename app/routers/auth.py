"""Authentication router for the Kanban API."""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.db.config import get_session
from app.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, UserResponse
from app.services.auth_service import AuthService

router = APIRouter(tags=["Authentication"])  # main.py mounts this under /api/auth


def get_auth_service(session: Session = Depends(get_session)) -> AuthService:
    """Dependency for getting AuthService instance."""
    return AuthService(session)


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(request: RegisterRequest, service: AuthService = Depends(get_auth_service)):
    """Create an account. The password is stored as a bcrypt hash."""
    user = service.register(request.email, request.password)
    return UserResponse(id=user.id, email=user.email)


@router.post("/login", response_model=LoginResponse)
def login(request: LoginRequest, service: AuthService = Depends(get_auth_service)):
    """Exchange email and password for a bearer token."""
    token, user = service.authenticate(request.email, request.password)
    return LoginResponse(token=token, user=UserResponse(id=user.id, email=user.email))
