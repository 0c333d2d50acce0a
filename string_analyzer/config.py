import os
import logging
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load environment variables only for local development
if os.path.exists('.env'):
    load_dotenv()
    logger.info("Loading from .env file (local development)")
else:
    logger.info("Loading from environment (production)")


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"⚠️ {name}={raw!r} is not an integer, using {default}")
        return default


# ------------------------------------------------------------------------------
# SERVICE
# ------------------------------------------------------------------------------
APP_TITLE = "String Analyzer Service"
APP_VERSION = "1.0.0"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
PORT = _int_env("PORT", 8000)
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# ------------------------------------------------------------------------------
# INPUT LIMITS
# ------------------------------------------------------------------------------
MAX_VALUE_LENGTH = _int_env("MAX_VALUE_LENGTH", 10000)
MAX_QUERY_LENGTH = _int_env("MAX_QUERY_LENGTH", 500)

# ------------------------------------------------------------------------------
# DATABASE
# ------------------------------------------------------------------------------
DATABASE_URL = os.getenv("DATABASE_URL")

if not DATABASE_URL:
    # Fallback for local dev
    logger.warning("⚠️ DATABASE_URL not found in environment, using local MySQL instance.")
    DATABASE_URL = "mysql+pymysql://root:@localhost:3306/string_analyzer_db"

# Hosting providers hand out plain mysql:// URLs
if DATABASE_URL.startswith("mysql://"):
    # SQLAlchemy expects "mysql+pymysql://"
    DATABASE_URL = DATABASE_URL.replace("mysql://", "mysql+pymysql://", 1)

# 0 disables startup cleanup
RECORD_RETENTION_DAYS = _int_env("RECORD_RETENTION_DAYS", 0)
