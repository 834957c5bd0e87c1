"""Runtime configuration for the Kanban task tracker."""
import os
from dotenv import load_dotenv

# Load environment variables from a local .env file when present
load_dotenv()

# Database
DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./kanban_app.db")
SQL_ECHO = os.environ.get("SQL_ECHO", "false").lower() == "true"

# Authentication
JWT_SECRET = os.environ.get("JWT_SECRET", "change-me-to-a-long-random-secret")
JWT_ALGORITHM = os.environ.get("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

# Environment / CORS
ENVIRONMENT = os.environ.get("ENVIRONMENT", "development")
FRONTEND_URL = os.environ.get("FRONTEND_URL", "http://localhost:3000")

# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# Notifications
DUE_SOON_HOURS = int(os.environ.get("DUE_SOON_HOURS", "24"))
REMINDER_POLL_SECONDS = float(os.environ.get("REMINDER_POLL_SECONDS", "60"))
