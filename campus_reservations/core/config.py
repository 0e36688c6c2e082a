import os
from dotenv import load_dotenv

load_dotenv()

# -------- DATABASE --------
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./campus_reservations.db")
SQLITE_BUSY_TIMEOUT = float(os.getenv("SQLITE_BUSY_TIMEOUT", 30))
AUTO_CREATE_SCHEMA = os.getenv("AUTO_CREATE_SCHEMA", "false").lower() in {"1", "true", "yes"}

# -------- AUTH CONTEXT --------
JWT_SECRET = os.getenv("JWT_SECRET", "change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60))

# -------- CACHE --------
REDIS_URL = os.getenv("REDIS_URL")
VENUE_CACHE_TTL = int(os.getenv("VENUE_CACHE_TTL", 60))

# -------- BOOKING LEDGER --------
BOOKING_MAX_RETRIES = int(os.getenv("BOOKING_MAX_RETRIES", 5))
BOOKING_RETRY_BACKOFF_MS = int(os.getenv("BOOKING_RETRY_BACKOFF_MS", 20))

# -------- LOGGING --------
LOG_DIR = os.getenv("LOG_DIR", "logs")
