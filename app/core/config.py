import os
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent.parent

# DEV default only: set SECRET_KEY in the environment for real deployments.
SECRET_KEY = os.getenv("SECRET_KEY", "change-me-in-production")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE = timedelta(days=7)

DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR}/course_platform.db")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Course analytics: a student counts as active if seen within this window
ACTIVE_WINDOW = timedelta(days=7)

MIN_PASSWORD_LENGTH = 6
