"""ASCII-safe URL slugs for article titles."""

from __future__ import annotations

import re
import unicodedata

_NON_SLUG_RE = re.compile(r"[^a-z0-9]+")


def generate_slug(title: str) -> str:
    """Generate a URL slug from an article title.

    Rule: lower-case, every run of characters outside [a-z0-9] becomes a
    single "-", no leading or trailing "-". Accented letters are folded to
    their ASCII base first.

    Example: "¿Qué es el Bitcoin?" -> "que-es-el-bitcoin"
    """
    if not title:
        return ""
    folded = unicodedata.normalize("NFKD", title)
    folded = "".join(ch for ch in folded if not unicodedata.combining(ch))
    slug = _NON_SLUG_RE.sub("-", folded.lower())
    return slug.strip("-")
