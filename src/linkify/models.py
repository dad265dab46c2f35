"""Data models for the linkify engine."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class KeywordRule:
    """A keyword and the URL its unlinked occurrences should point to."""
    keyword: str
    destination: str

    @property
    def is_usable(self) -> bool:
        """Both sides non-blank. Unusable rules are skipped, not rejected."""
        return bool(self.keyword.strip() and self.destination.strip())


@dataclass(frozen=True)
class LinkMatch:
    """A span of the original body that will be wrapped in a link."""
    start: int
    end: int
    text: str  # As found in the body (original casing)
    keyword: str  # As configured
    destination: str

    def overlaps(self, start: int, end: int) -> bool:
        return self.start < end and start < self.end

    def to_markdown(self) -> str:
        return f"[{self.text}]({self.destination})"


