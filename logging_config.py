import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

if os.environ.get("ENV") is None:
    file_path = Path(__file__).parent / ".env"
    load_dotenv(file_path)

QUIET_LOGGERS = ["httpx", "httpcore"]

def get_log_level() -> int:
    level_name = os.getenv("LOG_LEVEL")
    if level_name:
        level = logging.getLevelName(level_name.upper())
        if isinstance(level, int):
            return level
    return logging.DEBUG if os.getenv("ENV") == "development" else logging.INFO

def setup_logging() -> None:
    log_level = get_log_level()

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # One line per Firestore request otherwise
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    logging.getLogger(__name__).debug("Logging initialized at %s level", logging.getLevelName(log_level))
