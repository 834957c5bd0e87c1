"""Registration and login."""
from typing import Optional

import bcrypt
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from app.exceptions import InvalidCredentials, StoreFailure, ValidationError
from app.middleware.auth import create_access_token
from app.models.user import User
from app.utils.logger import get_logger

logger = get_logger(__name__)

BCRYPT_ROUNDS = 10
# bcrypt only reads the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Salted one-way hash of a plaintext password."""
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


class AuthService:
    """Service class for user registration and credential checks."""

    def __init__(self, session: Session):
        self.session = session

    def register(self, email: Optional[str], password: Optional[str]) -> User:
        """
        Create a user with a hashed password.

        Raises:
            ValidationError: email or password missing
            StoreFailure: the insert failed, including a duplicate email
        """
        if not email or not password:
            raise ValidationError("email and password required")

        user = User(email=email, password_hash=hash_password(password))
        try:
            self.session.add(user)
            self.session.commit()
            self.session.refresh(user)
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.exception("User registration failed", email=email, error=str(e))
            raise StoreFailure("server error or email already exists")

        logger.info("User registered", user_id=user.id)
        return user

    def authenticate(self, email: Optional[str], password: Optional[str]) -> tuple[str, User]:
        """
        Check credentials and issue a token.

        Unknown email and wrong password raise the same error.

        Returns:
            (token, user)
        """
        user = None
        if email:
            try:
                user = self.session.exec(select(User).where(User.email == email)).first()
            except SQLAlchemyError as e:
                logger.exception("User lookup failed", error=str(e))
                raise StoreFailure()

        if user is None or not password or not verify_password(password, user.password_hash):
            logger.info("Login rejected")
            raise InvalidCredentials()

        token = create_access_token(user.id, user.email)
        logger.info("User logged in", user_id=user.id)
        return token, user
