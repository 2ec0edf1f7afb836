import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Client: empty URL means offline mode against the local data file
SERVER_URL = os.getenv("FOCUS_SERVER_URL", "")
HTTP_TIMEOUT = float(os.getenv("FOCUS_HTTP_TIMEOUT", "5.0"))

# Shared JSON data file
DATA_FILE = Path(os.getenv("FOCUS_DATA_FILE", str(Path.cwd() / "data" / "data.json")))

# Server
HOST = os.getenv("FOCUS_HOST", "0.0.0.0")
PORT = int(os.getenv("FOCUS_PORT", "7272"))
CERT_DIR = Path(os.getenv("FOCUS_CERT_DIR", "/app/certs"))
API_PREFIX = "/api"

# Goal: 3 hours of focus per day
GOAL_SECONDS = int(os.getenv("FOCUS_GOAL_SECONDS", str(3 * 60 * 60)))

LOG_LEVEL = os.getenv("FOCUS_LOG_LEVEL", "INFO")
