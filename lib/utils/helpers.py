"""General helper utilities."""

import hmac
import time
from typing import Optional


def _unix_ts() -> int:
    return int(time.time())


def _is_missing_val(v: Optional[str]) -> bool:
    """Treat None and blank strings as missing."""
    return v is None or v.strip() == ""


def _tokens_match(presented: Optional[str], expected: Optional[str]) -> bool:
    """Constant time comparison; an unset secret never matches."""
    if not expected or presented is None:
        return False
    return hmac.compare_digest(
        presented.encode("utf-8"), expected.encode("utf-8")
    )
