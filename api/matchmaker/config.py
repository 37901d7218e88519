import os

DATABASE_URL = os.getenv("DATABASE_URL", "postgresql+psycopg2://postgres:postgres@db:5432/matchmaker")

EARTH_RADIUS_MILES = 3958.8
EARTH_RADIUS_KM = 6371.0
DISTANCE_UNIT = os.getenv("DISTANCE_UNIT", "mi").strip().lower()
if DISTANCE_UNIT not in {"mi", "km"}:
    raise ValueError(f"DISTANCE_UNIT must be one of: mi, km (got {DISTANCE_UNIT!r})")
EARTH_RADIUS = EARTH_RADIUS_KM if DISTANCE_UNIT == "km" else EARTH_RADIUS_MILES

SEED_DEMO_USERS = os.getenv("SEED_DEMO_USERS", "true").lower() == "true"
DB_WAIT_ATTEMPTS = int(os.getenv("DB_WAIT_ATTEMPTS", "20"))
DB_WAIT_DELAY_SECONDS = float(os.getenv("DB_WAIT_DELAY_SECONDS", "1.5"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8080"))
