import os

# Database (PostgreSQL in production, SQLite file for local runs)
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./pilgrim.db")

# Rotating API log; None lets utils.logger pick ./logs/api.log
LOG_PATH = os.getenv("PILGRIM_LOG_PATH")

# Moment photos are stored here and served from /files/photos
UPLOAD_DIR = os.getenv("PILGRIM_UPLOAD_DIR", "uploads")

# Zone used to split the timeline into days when the client does not send one
DEFAULT_TIMEZONE = os.getenv("PILGRIM_TIMEZONE", "UTC")

NOMINATIM_URL = os.getenv("NOMINATIM_URL", "https://nominatim.openstreetmap.org")
NOMINATIM_USER_AGENT = os.getenv("NOMINATIM_USER_AGENT", "PilgrimJournal/1.0")
GEOCODE_TIMEOUT = float(os.getenv("GEOCODE_TIMEOUT", "10.0"))
