import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from utils.constants import ALLOWED_WRITE_MODES, DEFAULT_WRITE_MODE, FIRESTORE_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

if os.environ.get("ENV") is None:
    file_path = Path(__file__).parent.parent / ".env"
    load_dotenv(file_path)

def get_firebase_project_id() -> str:
    return os.getenv("FIREBASE_PROJECT_ID", "pathx-7a636")

def get_firebase_api_key() -> str:
    return os.getenv("FIREBASE_API_KEY", "")

def get_firestore_emulator_host() -> str | None:
    return os.getenv("FIRESTORE_EMULATOR_HOST") or None

def get_auth_emulator_host() -> str | None:
    return os.getenv("FIREBASE_AUTH_EMULATOR_HOST") or None

def get_firestore_access_token() -> str | None:
    return os.getenv("FIRESTORE_ACCESS_TOKEN") or None

def get_firestore_timeout() -> float:
    raw = os.getenv("FIRESTORE_TIMEOUT_SECONDS")
    if not raw:
        return FIRESTORE_TIMEOUT_SECONDS
    try:
        return float(raw)
    except ValueError:
        logger.warning("Invalid FIRESTORE_TIMEOUT_SECONDS %r, using %s", raw, FIRESTORE_TIMEOUT_SECONDS)
        return FIRESTORE_TIMEOUT_SECONDS

def get_seed_write_mode() -> str:
    mode = os.getenv("SEED_WRITE_MODE", DEFAULT_WRITE_MODE).strip().lower()
    if mode not in ALLOWED_WRITE_MODES:
        logger.warning("Unknown SEED_WRITE_MODE %r, falling back to %s", mode, DEFAULT_WRITE_MODE)
        return DEFAULT_WRITE_MODE
    return mode

def get_admin_bootstrap_emails() -> set[str]:
    raw = os.getenv("ADMIN_BOOTSTRAP_EMAILS", "")
    return {email.strip().lower() for email in raw.split(",") if email.strip()}
