# Linkify — smartlink keyword auto-linking for article bodies
"""
Linkify module for wrapping configured keywords in smartlink anchors.

Links every unlinked, whole-word keyword occurrence in a Markdown body.
Existing links, images, code and URLs are never touched, and matches are
computed against the original body so replacements never cascade.
"""

from .engine import KeywordLinker, compile_keyword, linkify, linkify_rules, protected_regions
from .keywords import (
    FileKeywordSource,
    KeywordConfig,
    KeywordSource,
    SettingsKeywordSource,
    StaticKeywordSource,
    build_rules,
    split_keywords,
)
from .models import KeywordRule, LinkMatch

__all__ = [
    "KeywordLinker",
    "compile_keyword",
    "linkify",
    "linkify_rules",
    "protected_regions",
    "FileKeywordSource",
    "KeywordConfig",
    "KeywordSource",
    "SettingsKeywordSource",
    "StaticKeywordSource",
    "build_rules",
    "split_keywords",
    "KeywordRule",
    "LinkMatch",
]
