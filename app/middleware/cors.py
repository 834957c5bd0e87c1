"""CORS configuration for the board front end."""
from fastapi.middleware.cors import CORSMiddleware

from app.config import ENVIRONMENT, FRONTEND_URL
from app.utils.logger import get_logger

logger = get_logger(__name__)

# Base allowed origins for development
ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

# Add production frontend URL if provided
if FRONTEND_URL and FRONTEND_URL not in ALLOWED_ORIGINS:
    ALLOWED_ORIGINS.append(FRONTEND_URL)


def add_cors_middleware(app):
    """Add CORS middleware to the FastAPI application."""
    if ENVIRONMENT == "production":
        # Only the configured front end may call the API in production
        logger.info("Using production CORS", origins=[FRONTEND_URL])
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[FRONTEND_URL],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    else:
        logger.info("Using development CORS", origins=ALLOWED_ORIGINS)
        app.add_middleware(
            CORSMiddleware,
            allow_origins=ALLOWED_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
