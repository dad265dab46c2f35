"""Project configuration and paths.

Loads settings from config/settings.yaml and environment variables.
Environment variables (SMARTLINK_URL, SMARTLINK_KEYWORDS,
SMARTLINK_MAX_PER_KEYWORD) take precedence over the YAML file.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

# === Paths ===
PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"

# Load .env from project root
load_dotenv(PROJECT_ROOT / ".env")


class SmartlinkConfig(BaseModel):
    """Site-wide smartlink (keyword auto-link) settings."""
    url: str = ""
    keywords: str = ""  # Comma-separated, e.g. "AI, crypto, ETF"
    max_links_per_keyword: Optional[int] = Field(default=None, ge=1)


class Settings(BaseModel):
    """Top-level application settings."""
    smartlink: SmartlinkConfig = Field(default_factory=SmartlinkConfig)
    log_level: str = "INFO"

    @classmethod
    def load(cls, settings_path: Path | None = None) -> Settings:
        """Load settings from config/settings.yaml, falling back to defaults.

        Environment overrides are applied after the file is read.
        """
        settings_path = settings_path or CONFIG_DIR / "settings.yaml"
        data: dict = {}
        if settings_path.exists():
            with open(settings_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}

        smartlink = dict(data.get("smartlink") or {})
        env_overrides = {
            "url": os.getenv("SMARTLINK_URL"),
            "keywords": os.getenv("SMARTLINK_KEYWORDS"),
            "max_links_per_keyword": os.getenv("SMARTLINK_MAX_PER_KEYWORD"),
        }
        for key, value in env_overrides.items():
            if value:
                smartlink[key] = value
        data["smartlink"] = smartlink

        return cls(**data)


# Singleton settings instance
settings = Settings.load()
