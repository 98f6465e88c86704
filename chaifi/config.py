from dotenv import load_dotenv
import os
from typing import Final # So that my variables are immutable

# Load environment variables from .env file
load_dotenv(dotenv_path=".env")


def _as_bool(value: str) -> bool:
    return value.lower() in ("true", "1", "t", "yes")


# Database configuration
DATABASE_URL: Final[str] = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./chaifi.db")

# JWT configuration
SECRET_KEY: Final[str] = os.getenv("SECRET_KEY", "your-secret-key-here")  # Change in production!
ALGORITHM: Final[str] = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES: Final[int] = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "480"))
LOGIN_RATE_LIMIT: Final[str] = os.getenv("LOGIN_RATE_LIMIT", "5/minute")
RATE_LIMIT_ENABLED: Final[bool] = _as_bool(os.getenv("RATE_LIMIT_ENABLED", "True"))

# Seeded accounts, only used when the users table has no such username yet
DEFAULT_ADMIN_USERNAME: Final[str] = os.getenv("DEFAULT_ADMIN_USERNAME", "admin")
DEFAULT_ADMIN_PASSWORD: Final[str] = os.getenv("DEFAULT_ADMIN_PASSWORD", "admin@2020")
DEFAULT_STAFF_USERNAME: Final[str] = os.getenv("DEFAULT_STAFF_USERNAME", "Chai-fi")
DEFAULT_STAFF_PASSWORD: Final[str] = os.getenv("DEFAULT_STAFF_PASSWORD", "Chai-fi@2025")

# Counter settings
DEFAULT_STOCK_QUANTITY: Final[int] = int(os.getenv("DEFAULT_STOCK_QUANTITY", "100"))
LOW_STOCK_THRESHOLD: Final[int] = int(os.getenv("LOW_STOCK_THRESHOLD", "10"))
DEFAULT_BILLER_NAME: Final[str] = os.getenv("DEFAULT_BILLER_NAME", "Sriram")

# Application
API_VERSION: Final[str] = os.getenv("API_VERSION", "v1")
DEBUG: Final[bool] = _as_bool(os.getenv("DEBUG", "False"))

# Logging (LOG_LANG rather than LANG, which the shell already uses for the locale)
LANG: Final[str] = os.getenv("LOG_LANG", "en")
LOGLEVEL: Final[str] = os.getenv("LOGLEVEL", "INFO").upper()
