"""Keyword Source — turn smartlink settings into keyword rules.

The backend stores smartlink configuration as one destination URL plus a
comma-separated keyword string. This module splits that string, builds
ordered `KeywordRule`s, and offers read-only sources the renderer can ask
for the current configuration:

    StaticKeywordSource("https://x.test", "AI, ETF")
    SettingsKeywordSource()            # config/settings.yaml + env
    FileKeywordSource(Path("smartlinks.yaml"))
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Optional, Protocol

import yaml

from src.common.models import SmartlinkSettings

from .models import KeywordRule

if TYPE_CHECKING:
    from src.common.config import Settings

logger = logging.getLogger(__name__)


def split_keywords(raw: Optional[str]) -> list[str]:
    """Split a comma-separated keyword list.

    Entries are trimmed and empty entries dropped. Order is kept and
    duplicates are not removed.

    Example: " AI, ,crypto ,AI" -> ["AI", "crypto", "AI"]
    """
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


def build_rules(keywords: Iterable[str], destination: str) -> list[KeywordRule]:
    """Pair every keyword with the same destination."""
    return [KeywordRule(keyword=kw, destination=destination) for kw in keywords]


@dataclass
class KeywordConfig:
    """Keyword configuration for one render, passed explicitly to the engine.

    `raw_keywords` all share `destination`. Explicit `rules` carry their own
    destinations and come after the shared-destination keywords.
    """
    destination: str = ""
    raw_keywords: str = ""
    max_links_per_keyword: Optional[int] = None
    rules: list[KeywordRule] = field(default_factory=list)

    @property
    def keywords(self) -> list[str]:
        return split_keywords(self.raw_keywords)

    def to_rules(self) -> list[KeywordRule]:
        """Ordered rules: shared-destination keywords first, then explicit rules."""
        shared = build_rules(self.keywords, self.destination) if self.destination.strip() else []
        return shared + list(self.rules)

    @property
    def is_empty(self) -> bool:
        return not any(rule.is_usable for rule in self.to_rules())

    @classmethod
    def from_settings_row(cls, row: SmartlinkSettings) -> KeywordConfig:
        """Build a configuration from the backend `settings` row."""
        return cls(
            destination=row.smartlink_url,
            raw_keywords=row.smartlink_keywords,
            max_links_per_keyword=row.max_links_per_keyword,
        )


class KeywordSource(Protocol):
    """Anything that can hand the renderer the current keyword configuration."""

    def get_config(self) -> KeywordConfig:
        ...


class StaticKeywordSource:
    """Fixed configuration, e.g. from CLI flags or a settings row already fetched."""

    def __init__(
        self,
        destination: str = "",
        raw_keywords: str = "",
        max_links_per_keyword: Optional[int] = None,
        rules: Optional[list[KeywordRule]] = None,
    ) -> None:
        self._config = KeywordConfig(
            destination=destination,
            raw_keywords=raw_keywords,
            max_links_per_keyword=max_links_per_keyword,
            rules=list(rules or []),
        )

    def get_config(self) -> KeywordConfig:
        return self._config


class SettingsKeywordSource:
    """Configuration from config/settings.yaml and SMARTLINK_* env vars.

    The app settings are only loaded when no `settings` object is passed,
    so importing the engine never reads the environment.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        if settings is None:
            from src.common.config import settings as default_settings

            settings = default_settings
        self._settings = settings

    def get_config(self) -> KeywordConfig:
        smartlink = self._settings.smartlink
        return KeywordConfig(
            destination=smartlink.url,
            raw_keywords=smartlink.keywords,
            max_links_per_keyword=smartlink.max_links_per_keyword,
        )


class FileKeywordSource:
    """Configuration from a JSON or YAML file.

    Accepted shape (every key optional):

        smartlink_url: https://x.test
        smartlink_keywords: "AI, ETF"
        max_links_per_keyword: 1
        rules:
          - keyword: Bitcoin
            destination: https://btc.test

    The file is read on every `get_config` call so edits are picked up
    between renders.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def get_config(self) -> KeywordConfig:
        if not self.path.exists():
            logger.warning("Smartlink file %s not found, linking disabled", self.path)
            return KeywordConfig()

        data = self._read()
        row = SmartlinkSettings(**{k: v for k, v in data.items() if k != "rules"})
        config = KeywordConfig.from_settings_row(row)
        config.rules = self._parse_rules(data.get("rules") or [])

        logger.info(
            "Loaded %d keyword(s) and %d explicit rule(s) from %s",
            len(config.keywords),
            len(config.rules),
            self.path,
        )
        return config

    def _read(self) -> dict:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                if self.path.suffix.lower() == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ValueError(f"Cannot parse smartlink file {self.path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(
                f"Smartlink file {self.path} must contain a mapping, "
                f"got {type(data).__name__}"
            )
        return data

    def _parse_rules(self, entries: list) -> list[KeywordRule]:
        if not isinstance(entries, list):
            raise ValueError(f"'rules' in {self.path} must be a list")

        rules: list[KeywordRule] = []
        for i, entry in enumerate(entries):
            if not isinstance(entry, dict) or "keyword" not in entry or "destination" not in entry:
                raise ValueError(
                    f"Rule #{i} in {self.path} needs 'keyword' and 'destination'"
                )
            rules.append(KeywordRule(
                keyword=str(entry["keyword"]),
                destination=str(entry["destination"]),
            ))
        return rules
