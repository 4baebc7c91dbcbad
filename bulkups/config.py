import os
from dotenv import load_dotenv

load_dotenv()


def _positive_int(name, default):
    raw = os.getenv(name, default)
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a positive integer, got {raw!r}") from e
    if value < 1:
        raise ValueError(f"{name} must be a positive integer, got {raw!r}")
    return value


# Database
DATABASE_URL = os.getenv("DATABASE_URL")

# Batch Sizes
# Too many bind variables in one statement exceeds the prepared statement limit.
DEFAULT_CHUNK_SIZE = _positive_int("BULKUPS_CHUNK_SIZE", "2000")

# Timestamps
TIMESTAMP_TIMEZONE = os.getenv("BULKUPS_TIMEZONE", "UTC")
TIMESTAMP_FIELDS = ("created_at", "updated_at")
