"""JWT bearer-token issuance and verification for FastAPI."""
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Request
from jose import jwt, JWTError, ExpiredSignatureError
from pydantic import BaseModel

from app.config import ACCESS_TOKEN_EXPIRE_MINUTES, JWT_ALGORITHM, JWT_SECRET
from app.exceptions import InvalidToken, Unauthenticated
from app.utils.logger import get_logger

logger = get_logger(__name__)


class CurrentUser(BaseModel):
    """Identity asserted by a verified token."""
    id: int
    email: str


def create_access_token(user_id: int, email: str, expires_minutes: Optional[int] = None) -> str:
    """Issue a signed token embedding the user's id and email."""
    now = datetime.now(timezone.utc)
    expire = now + timedelta(minutes=expires_minutes or ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {
        "sub": str(user_id),
        "id": user_id,
        "email": email,
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def verify_token(token: Optional[str]) -> CurrentUser:
    """
    Decode a bearer token and return the identity it asserts.

    Raises:
        Unauthenticated: no token supplied
        InvalidToken: bad signature, malformed, missing claims or expired
    """
    if not token:
        raise Unauthenticated()

    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except ExpiredSignatureError:
        logger.info("Rejected expired token")
        raise InvalidToken("token expired")
    except JWTError as e:
        logger.info("Rejected invalid token", error=str(e))
        raise InvalidToken()

    user_id = payload.get("id")
    email = payload.get("email")
    if not isinstance(user_id, int) or not isinstance(email, str):
        raise InvalidToken()

    return CurrentUser(id=user_id, email=email)


async def get_current_user(request: Request) -> CurrentUser:
    """
    Validate the Authorization header and extract the user identity.

    Args:
        request: FastAPI request object to extract Authorization header

    Returns:
        CurrentUser with id and email from the token

    Raises:
        Unauthenticated: header missing or carrying no credential
        InvalidToken: credential present but not verifiable, whatever its scheme
    """
    auth_header = request.headers.get("authorization") or ""
    parts = auth_header.split(" ", 1)
    token = parts[1].strip() if len(parts) == 2 else None

    return verify_token(token)
