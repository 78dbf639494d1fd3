# takween/config/settings.py
# Application configuration read from the environment

import os
from datetime import time
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


class Settings:
    """Runtime settings for the Takween API"""

    # Database
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./takween.db")
    DATABASE_SSL = _flag("DATABASE_SSL", "false")

    # JWT
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me-in-production")
    ALGORITHM = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 12))

    # Server
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "8000"))
    RELOAD = _flag("RELOAD", "true")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    CORS_ORIGINS = os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000",
    )

    # Startup behaviour
    SCHEDULER_ENABLED = _flag("SCHEDULER_ENABLED", "true")
    SEED_ON_STARTUP = _flag("SEED_ON_STARTUP", "false")

    # Domain tunables
    SPRINT_EXPIRY_WARNING_DAYS = int(os.getenv("SPRINT_EXPIRY_WARNING_DAYS", 3))
    WORKDAY_START = os.getenv("WORKDAY_START", "09:00")
    DEFAULT_DEPARTMENT_ID = os.getenv("DEFAULT_DEPARTMENT_ID", "arch")
    DEFAULT_TASK_WEIGHT = int(os.getenv("DEFAULT_TASK_WEIGHT", 10))
    DEFAULT_SPRINT_LENGTH_DAYS = int(os.getenv("DEFAULT_SPRINT_LENGTH_DAYS", 14))

    # Generative text API used for insights
    GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
    GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
    GEMINI_BASE_URL = os.getenv(
        "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
    )
    GEMINI_TIMEOUT_SECONDS = float(os.getenv("GEMINI_TIMEOUT_SECONDS", 20))

    @classmethod
    def get_cors_origins(cls) -> List[str]:
        """Split the comma separated CORS origin list"""
        return [origin.strip() for origin in cls.CORS_ORIGINS.split(",") if origin.strip()]

    @classmethod
    def get_workday_start(cls) -> time:
        """Parse WORKDAY_START (HH:MM) into a time"""
        hours, minutes = cls.WORKDAY_START.split(":")
        return time(int(hours), int(minutes))
