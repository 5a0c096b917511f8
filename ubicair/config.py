"""Shared configuration for the UbicAir dashboard."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

env_path = BASE_DIR / ".env"
if env_path.exists():
    load_dotenv(env_path)

# ─── Backend ───────────────────────────────────────
API_URL = os.getenv("UBICAIR_API_URL", "http://localhost:3000").rstrip("/")
REQUEST_TIMEOUT_S = float(os.getenv("UBICAIR_REQUEST_TIMEOUT_S", "10"))

# ─── Live Radar ────────────────────────────────────
FLIGHTS_POLL_INTERVAL_S = 3
STATS_POLL_INTERVAL_S = 10
POLL_WORKERS = 4
LIVE_IDLE_TIMEOUT_S = 60

# ─── Map ───────────────────────────────────────────
MAP_CENTER = (45.0, 10.0)
MAP_ZOOM = 4
FIT_PADDING_PX = 50
FIT_MAX_ZOOM = 6
MAP_HEIGHT_PX = 600
TILES_URL = "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png"
TILES_ATTRIBUTION = '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a>'

# ─── Plane Icons ───────────────────────────────────
ICON_BASE_SIZE = 36
ICON_SMALL_SIZE = 28
ICON_LARGE_SIZE = 48
PROGRESS_COLORS = (
    "#667eea",    # Departing
    "#3351d5ff",  # Mid-route
    "#0724a3ff",  # Arriving
)

# ─── Search & Forms ────────────────────────────────
SEARCH_MIN_CHARS = 2
PASSWORD_MIN_LENGTH = 6
PHOTO_MAX_BYTES = 5 * 1024 * 1024

# ─── Logging ───────────────────────────────────────
LOG_LEVEL = os.getenv("UBICAIR_LOG_LEVEL", "INFO").upper()

logger = logging.getLogger("ubicair")
if not logger.handlers:
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(message)s")
logger.setLevel(LOG_LEVEL)
