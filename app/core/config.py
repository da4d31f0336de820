import os

def get_secret(secret_name: str) -> str | None:
    secret_path = f'/run/secrets/{secret_name}'
    try:
        with open(secret_path, 'r', encoding='utf-8') as secret_file:
            return secret_file.read().strip()
    except IOError:
        return os.getenv(secret_name)


DB_PASSWORD = get_secret('db_password')

POSTGRES_DB = os.getenv("POSTGRES_DB")
POSTGRES_USER = os.getenv("POSTGRES_USER")
DB_HOST = os.getenv("DB_HOST", "localhost")
DB_PORT = os.getenv("DB_PORT", "5432")
REDIS_URL = os.getenv("REDIS_URL")

DATABASE_URL = os.getenv("DATABASE_URL")
if not DATABASE_URL:
    if POSTGRES_USER and DB_PASSWORD and POSTGRES_DB:
        DATABASE_URL = f"postgresql+asyncpg://{POSTGRES_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{POSTGRES_DB}"
    else:
        raise ValueError("Can't build DATABASE_URL")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

SEAT_ALLOCATION_CONTIGUOUS = os.getenv("SEAT_ALLOCATION_CONTIGUOUS", "true").lower() in ("1", "true", "yes")
MAX_TICKETS_PER_REQUEST = int(os.getenv("MAX_TICKETS_PER_REQUEST", "50"))

AUDIT_STREAM = os.getenv("AUDIT_STREAM", "audit:events")
AUDIT_GROUP = os.getenv("AUDIT_GROUP", "audit-g1")
AUDIT_BATCH = int(os.getenv("AUDIT_BATCH", "200"))
AUDIT_BLOCK_MS = int(os.getenv("AUDIT_BLOCK_MS", "5000"))

DB_ECHO = os.getenv("DB_ECHO", "false").lower() in ("1", "true", "yes")
REDIS_HEALTH_CHECK_S = int(os.getenv("REDIS_HEALTH_CHECK_S", "30"))
