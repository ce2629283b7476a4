"""Human-readable tracking codes issued on payment settlement."""

import re
import secrets
from datetime import datetime, timezone

TRACKING_PREFIX = "LL"
TRACKING_SUFFIX_LENGTH = 6

TRACKING_CODE_PATTERN = re.compile(r"LL-\d{8}-[0-9A-F]{6}")


def generate_tracking_code(now: datetime | None = None) -> str:
    """
    Generate a tracking code like ``LL-20250117-3FA2C9``.

    The date part is the UTC date of generation. Uniqueness is
    probabilistic and is not checked against storage.
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)

    suffix = secrets.token_hex(TRACKING_SUFFIX_LENGTH // 2).upper()
    return f"{TRACKING_PREFIX}-{now:%Y%m%d}-{suffix}"


def is_tracking_code(value: str) -> bool:
    """Check whether a string is a well-formed tracking code."""
    return bool(TRACKING_CODE_PATTERN.fullmatch(value or ""))
