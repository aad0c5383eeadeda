# Common utilities and shared modules
"""
Shared components used by the content index builder:
- Project configuration (pydantic settings + YAML + .env)
- Logging configuration
"""

from .config import settings, Settings, IndexSettings, PROJECT_ROOT, DATA_DIR
from .logging import setup_logging

__all__ = [
    "settings",
    "Settings",
    "IndexSettings",
    "PROJECT_ROOT",
    "DATA_DIR",
    "setup_logging",
]
