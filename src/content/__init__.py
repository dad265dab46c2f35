# Content — article helpers around the linkify engine
"""
Content helpers:
- slug: ASCII-safe slugs for article titles
- renderer: per-render linkification of article bodies
  (import from src.content.renderer)
"""

from .slug import generate_slug

__all__ = ["generate_slug"]
