from collections.abc import Iterator, Sequence
from datetime import datetime, timezone
from typing import TypeVar

T = TypeVar("T")

def utc_now_iso() -> str:
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"

def chunked(items: Sequence[T], size: int) -> Iterator[list[T]]:
    if size <= 0:
        raise ValueError("chunk size must be positive")
    for start in range(0, len(items), size):
        yield list(items[start:start + size])

def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()
