import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# Local development falls back to a SQLite file next to the app
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./chairfill.db")

# Frontend base URL (Next.js client)
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")

# Comma separated list of origins allowed to call the API
ALLOWED_ORIGINS = os.getenv(
    "ALLOWED_ORIGINS",
    f"{FRONTEND_URL},http://localhost:3000",
).split(",")

# Contact import limits
MAX_CONTACT_FILE_SIZE = int(os.getenv("MAX_CONTACT_FILE_SIZE", str(5 * 1024 * 1024)))  # 5MB
