"""Utility functions for FieldForm application"""

import logging
import math
import re
import time
from datetime import datetime
from functools import wraps
from pathlib import Path
from typing import Any, Callable, Literal, Optional, Tuple, Type

from .consts import LEADING_NUMBER_PATTERN

logger = logging.getLogger(__name__)


BackoffStrategy = Literal["exponential", "fixed"]

_leading_number = re.compile(LEADING_NUMBER_PATTERN, re.ASCII)


def canonicalify(p: Path | str) -> Path:
    return Path(p).expanduser().resolve()


def ensure_path(p: Path | str) -> Path:
    path = canonicalify(p)
    path.mkdir(parents=True, exist_ok=True)
    return path


def retry(
    times: int,
    initial_delay: int = 1,
    backoff: BackoffStrategy = "exponential",
    exceptions: Tuple[Type[Exception], ...] = (Exception,),
    on_retry: Optional[Callable[[tuple, dict, Exception, int], None]] = None,
):
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            delay = initial_delay

            for attempt in range(times):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    is_last_attempt = attempt == times - 1
                    error_msg = str(e)[:100]

                    if is_last_attempt:
                        logger.error(f"Request failed, max retries ({times}) reached")
                        raise

                    logger.warning(
                        f"Request failed (attempt {attempt + 1}/{times}), "
                        f"retrying in {delay}s. Error: {error_msg}"
                    )

                    if on_retry:
                        on_retry(args, kwargs, e, attempt + 1)

                    time.sleep(delay)

                    if backoff == "exponential":
                        delay *= 2

        return wrapper

    return decorator


def sanitize(sensitive: str | None, keep_chars: int = 2) -> str:
    """Mask sensitive information for logging.

    Examples:
        >>> sanitize("sk-abc123def456xyz789")
        'sk***89'
        >>> sanitize(None)
        '***'
    """
    if not sensitive:
        return "***"

    if len(sensitive) <= keep_chars * 2:
        return "***"

    return f"{sensitive[:keep_chars]}***{sensitive[-keep_chars:]}"


def parse_number(value: Any) -> float:
    """Leniently parse a submitted value as a float.

    Strings are read up to the end of their leading numeric literal, so
    ``"12abc"`` gives ``12.0``. Anything without a leading number, booleans
    and non-scalar values give ``nan``.

    Examples:
        >>> parse_number("12.5 kV")
        12.5
        >>> parse_number(450)
        450.0
        >>> math.isnan(parse_number("abc"))
        True
    """
    if isinstance(value, bool):
        return math.nan
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        match = _leading_number.match(value)
        if match:
            return float(match.group(1))
    return math.nan


def normalize_number(value: float | int) -> float | int:
    """Return integral finite floats as ``int`` so they serialize as ``450``."""
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return value


def format_number(value: float | int) -> str:
    """Render a number for human-readable messages.

    Examples:
        >>> format_number(450.0)
        '450'
        >>> format_number(0.5)
        '0.5'
        >>> format_number(float("inf"))
        'Infinity'
    """
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
    return str(normalize_number(value))


def format_timestamp(dt: datetime | str | None) -> str | None:
    """Format a stored timestamp as ISO 8601.

    SQLite hands timezone-aware values back as strings, so those pass through.
    """
    if dt is None:
        return None
    if isinstance(dt, datetime):
        return dt.isoformat()
    return str(dt)
