from __future__ import annotations

import os
from functools import cache

PROD_NAMES = frozenset({"prod", "production"})


@cache
def is_prod() -> bool:
    """True when APP_ENV names a production deployment. Anything else, or unset, is non-prod."""
    return (os.getenv("APP_ENV") or "").strip().lower() in PROD_NAMES
