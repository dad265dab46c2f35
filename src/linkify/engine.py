"""Linkify Engine — wrap configured keywords in smartlink anchors.

Scans a Markdown article body and turns unlinked, whole-word keyword
occurrences into `[keyword](destination)` links.

Rules:
1. Matching is case-insensitive; the link label keeps the body's casing.
2. A match must not touch a word character on either side ("AI" never
   matches inside "MAINFRAME"). Keywords that start or end with a symbol
   also refuse a neighbour repeating that symbol ("C++" vs "C+++").
3. Occurrences directly after "[" or followed on the same line by "](" are
   already link labels and are left alone.
4. Nothing inside code, existing links/images, HTML tags, anchors or bare
   URLs is ever linked.
5. All spans are found against the original body first (earlier keywords
   win on overlap) and the body is rewritten once, so a keyword can never
   match inside a link inserted for another keyword.

Usage:
    linkify("MAINFRAME uses AI daily", ["AI"], "https://x.test")
    # -> "MAINFRAME uses [AI](https://x.test) daily"

    linker = KeywordLinker([KeywordRule("ETF", "https://a.test")])
    linker.apply(body)
"""

from __future__ import annotations

import bisect
import logging
import re
import unicodedata
from typing import Iterable, Optional, Sequence, Union

from .keywords import build_rules, split_keywords
from .models import KeywordRule, LinkMatch

logger = logging.getLogger(__name__)

# Markup whose content must never be linked. Order matters: longer
# constructs are listed before the ones they contain. Comment and anchor
# bodies stop at the next opener so an unclosed one never rescans the body.
_PROTECTED_RE = re.compile(
    r"^(?P<fence>`{3,}|~{3,})[^\n]*\n.*?(?:^(?P=fence)[ \t]*$|\Z)"  # fenced code
    r"|`[^`\n]+`"                                    # inline code
    r"|<!--(?:(?!<!--).)*?-->"                       # HTML comments
    r"|<a\b[^<>]*>(?:(?!<a\b).)*?</a\s*>"            # HTML anchors
    r"|\[!\[[^\]\n]*\]\([^)\n]*\)\]\([^)\n]*\)"      # linked images
    r"|!?\[[^\]\n]*\]\([^)\n]*\)"                    # links and images
    r"|!?\[[^\]\n]*\]\[[^\]\n]*\]"                   # reference links
    r"|^[ \t]{0,3}\[[^\]\n]+\]:[^\n]*$"              # reference definitions
    r"|</?[A-Za-z][A-Za-z0-9-]*(?=[\s/>])[^<>\n]*>"  # HTML tags
    r"|<[A-Za-z][A-Za-z0-9+.-]{1,31}:[^\s<>]*>"      # URI autolinks
    r"|<[^\s<>@()\[\]]+@[^\s<>@()\[\]]+>"            # email autolinks
    r"|(?:https?|ftp)://[^\s<>()\[\]]+",             # bare URLs
    re.IGNORECASE | re.MULTILINE | re.DOTALL,
)

_BRACKET_OR_NEWLINE_RE = re.compile(r"[\[\]\n]")


def _is_mark(ch: str) -> bool:
    return unicodedata.category(ch).startswith("M")


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_" or _is_mark(ch)


def compile_keyword(keyword: str) -> re.Pattern:
    """Build the literal, whole-word, case-insensitive pattern for a keyword.

    Raises:
        ValueError: If the keyword is blank.
    """
    keyword = keyword.strip()
    if not keyword:
        raise ValueError("Cannot compile a blank keyword")

    lead = r"(?<![\w\[])"
    if not _is_word_char(keyword[0]):
        lead += f"(?<!{re.escape(keyword[0])})"

    trail = r"(?!\w)"
    if not _is_word_char(keyword[-1]):
        trail += f"(?!{re.escape(keyword[-1])})"

    return re.compile(lead + re.escape(keyword) + trail, re.IGNORECASE)


def protected_regions(body: str) -> list[tuple[int, int]]:
    """Return sorted, non-overlapping (start, end) spans that must not be linked."""
    return [m.span() for m in _PROTECTED_RE.finditer(body) if m.end() > m.start()]


def _overlaps(spans: list[tuple[int, int]], start: int, end: int) -> bool:
    """Check a span against a sorted list of non-overlapping spans."""
    idx = bisect.bisect_right(spans, (start, float("inf"))) - 1
    if idx >= 0 and spans[idx][1] > start:
        return True
    nxt = idx + 1
    return nxt < len(spans) and spans[nxt][0] < end


def _touches_mark(body: str, start: int, end: int) -> bool:
    """A combining mark on either side glues the span to a neighbouring letter."""
    return (start > 0 and _is_mark(body[start - 1])) or (
        end < len(body) and _is_mark(body[end])
    )


def _is_link_label(body: str, boundaries: list[int], end: int) -> bool:
    """True when the first bracket or newline after `end` opens "](".

    `boundaries` holds the sorted positions of every "[", "]" and newline.
    """
    idx = bisect.bisect_left(boundaries, end)
    return idx < len(boundaries) and body.startswith("](", boundaries[idx])


class KeywordLinker:
    """Links keyword occurrences in article bodies.

    Holds compiled patterns only; every call to `apply` is independent, so
    one instance can serve many documents concurrently.
    """

    def __init__(
        self,
        rules: Iterable[KeywordRule],
        max_links_per_keyword: Optional[int] = None,
    ) -> None:
        """
        Args:
            rules: Ordered keyword rules. Earlier rules win on overlap.
                Blank keywords/destinations and repeated keywords
                (case-insensitive) are skipped.
            max_links_per_keyword: Link at most this many occurrences of
                each keyword. None links every occurrence.
        """
        self.max_links_per_keyword = max_links_per_keyword
        self._compiled: list[tuple[KeywordRule, re.Pattern]] = []

        seen: set[str] = set()
        for rule in rules:
            if not rule.is_usable:
                continue
            keyword = rule.keyword.strip()
            folded = keyword.casefold()
            if folded in seen:
                continue
            seen.add(folded)
            clean = KeywordRule(keyword=keyword, destination=rule.destination.strip())
            self._compiled.append((clean, compile_keyword(keyword)))

    @property
    def rules(self) -> list[KeywordRule]:
        return [rule for rule, _ in self._compiled]

    def find_matches(self, body: str) -> list[LinkMatch]:
        """Find every span to link in `body`, sorted by position."""
        if not body or not self._compiled:
            return []

        protected = protected_regions(body)
        boundaries = [m.start() for m in _BRACKET_OR_NEWLINE_RE.finditer(body)]
        taken: list[tuple[int, int]] = []
        matches: list[LinkMatch] = []
        limit = self.max_links_per_keyword

        for rule, pattern in self._compiled:
            count = 0
            pos = 0
            while limit is None or count < limit:
                m = pattern.search(body, pos)
                if m is None:
                    break
                start, end = m.span()
                if (
                    _overlaps(protected, start, end)
                    or _overlaps(taken, start, end)
                    or _touches_mark(body, start, end)
                    or _is_link_label(body, boundaries, end)
                ):
                    pos = start + 1
                    continue
                pos = end
                bisect.insort(taken, (start, end))
                matches.append(LinkMatch(
                    start=start,
                    end=end,
                    text=m.group(0),
                    keyword=rule.keyword,
                    destination=rule.destination,
                ))
                count += 1

        matches.sort(key=lambda match: match.start)
        return matches

    def apply(self, body: str) -> str:
        """Return `body` with every found span wrapped in a link."""
        matches = self.find_matches(body)
        if not matches:
            return body

        parts: list[str] = []
        last_end = 0
        for match in matches:
            parts.append(body[last_end:match.start])
            parts.append(match.to_markdown())
            last_end = match.end
        parts.append(body[last_end:])

        logger.debug(
            "Linked %d occurrence(s) for %d keyword rule(s)",
            len(matches),
            len(self._compiled),
        )
        return "".join(parts)


def linkify_rules(
    body: str,
    rules: Iterable[KeywordRule],
    max_links_per_keyword: Optional[int] = None,
) -> str:
    """Linkify `body` with per-keyword destinations."""
    if not body:
        return body
    return KeywordLinker(rules, max_links_per_keyword).apply(body)


def linkify(
    body: str,
    keywords: Union[Sequence[str], str],
    destination: str,
    max_links_per_keyword: Optional[int] = None,
) -> str:
    """Linkify `body`, pointing every keyword at the same destination.

    Args:
        body: Markdown article body (may be empty).
        keywords: Ordered keywords. A raw comma-separated string is split
            the same way site settings are.
        destination: Shared link target. Blank means no-op.
        max_links_per_keyword: Optional per-keyword link cap.

    Returns:
        The transformed body, or `body` itself when there is nothing to do.
    """
    if isinstance(keywords, str):
        keywords = split_keywords(keywords)
    if not body or not keywords or not destination or not destination.strip():
        return body
    return linkify_rules(body, build_rules(keywords, destination), max_links_per_keyword)
