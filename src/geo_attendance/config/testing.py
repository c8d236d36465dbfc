import os

from .base import ATTENDANCE_TIMEZONE, DEFAULT_LOCATION_ID, JWT_EXPIRES_HOURS, WORK_START_TIME, db_config, env_flag

SECRET_KEY = "test-secret"
JWT_SECRET = "test-jwt-secret"

DB_CONFIG = db_config()

DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")
