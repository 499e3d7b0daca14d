from .core.env import is_prod
from .core.logging import setup_logging
from .settings import BodySettings, get_body_settings

__all__ = [
    "is_prod",
    "setup_logging",
    "BodySettings",
    "get_body_settings",
]
