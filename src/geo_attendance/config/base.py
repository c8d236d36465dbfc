"""Settings shared by every environment module."""

import os


def env_flag(name: str, default: str) -> bool:
    return bool(int(os.getenv(name, default)))


def db_config(default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "employee_attendance"),
        "pool_size": int(os.getenv("DB_POOL_SIZE", "10")),
        "pool_timeout": float(os.getenv("DB_POOL_TIMEOUT", "10")),
    }


JWT_EXPIRES_HOURS = int(os.getenv("JWT_EXPIRES_HOURS", "24"))

# Check-ins strictly after this time of day are classified as late
WORK_START_TIME = os.getenv("WORK_START_TIME", "08:00:00")

# Empty means "lowest-id active office"
DEFAULT_LOCATION_ID = int(os.getenv("DEFAULT_LOCATION_ID")) if os.getenv("DEFAULT_LOCATION_ID") else None

# Empty means the server-local clock decides what "today" is
ATTENDANCE_TIMEZONE = os.getenv("ATTENDANCE_TIMEZONE") or None
