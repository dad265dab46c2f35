# Common utilities and shared modules
"""
Shared components used by the linkify engine and content helpers:
- Data models (Pydantic schemas)
- Logging configuration
- Project configuration (src.common.config, loaded on first import)

Settings are not re-exported here: importing any shared module must not
read config/settings.yaml or the environment.
"""

from .logging import setup_logging

__all__ = [
    "setup_logging",
]
