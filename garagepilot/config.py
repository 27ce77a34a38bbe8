import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./garagepilot.db")

# All REST routers are mounted below this prefix
API_PREFIX = os.getenv("API_PREFIX", "/api")

# "development" or "production"
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

SECURITY_HEADERS_ENABLED = os.getenv("SECURITY_HEADERS_ENABLED", "true").lower() == "true"

ALLOWED_ORIGINS = os.getenv(
    "ALLOWED_ORIGINS",
    "http://localhost:5173,http://localhost:3000",
).split(",")

# Service board: "free" lets a card move between any two columns,
# "forward_only" follows the column order (Cancelled allowed until Completed)
BOARD_TRANSITION_MODE = os.getenv("BOARD_TRANSITION_MODE", "free")

# Used by run_board.py and HttpAppointmentStore defaults
GARAGEPILOT_API_URL = os.getenv("GARAGEPILOT_API_URL", "http://localhost:8000/api")
GARAGEPILOT_API_TOKEN = os.getenv("GARAGEPILOT_API_TOKEN")
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "10.0"))
