"""Shared Pydantic data models for the smartlink engine.

These models mirror the rows the editorial backend hands us: the
`articles` table and the single-row `settings` table. The engine itself
never reads them from the database; callers pass them in.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from src.content.slug import generate_slug


# === Enums ===

class Category(str, Enum):
    """Editorial categories."""
    TECHNOLOGY = "Technology"
    FINANCE = "Finance"


# === Backend rows ===

class SmartlinkSettings(BaseModel):
    """The site-wide `settings` row.

    Only `smartlink_url` and `smartlink_keywords` feed the linkify engine.
    The ad-slot fields are raw HTML snippets kept as opaque strings.
    """
    smartlink_url: str = ""
    smartlink_keywords: str = ""
    max_links_per_keyword: Optional[int] = Field(default=None, ge=1)

    banner_header: Optional[str] = None
    banner_sidebar: Optional[str] = None
    banner_footer: Optional[str] = None
    banner_article_bottom: Optional[str] = None
    popunder_code: Optional[str] = None
    social_bar_code: Optional[str] = None

    model_config = {"extra": "ignore"}

    @field_validator("smartlink_keywords", mode="before")
    @classmethod
    def join_keyword_list(cls, v):
        if isinstance(v, (list, tuple)):
            return ", ".join(str(item) for item in v)
        return v if v is not None else ""

    @field_validator("smartlink_url", mode="before")
    @classmethod
    def none_url_to_empty(cls, v):
        return "" if v is None else v

    @property
    def has_smartlink(self) -> bool:
        return bool(self.smartlink_url.strip() and self.smartlink_keywords.strip())


class Article(BaseModel):
    """A single article as stored by the backend."""
    id: Optional[int] = None
    title: str
    slug: str = ""
    content: str = ""
    excerpt: str = ""
    category: Category = Category.TECHNOLOGY
    image_url: str = ""
    published_at: Optional[datetime] = None
    is_published: bool = False
    views: int = Field(default=0, ge=0)
    likes: int = Field(default=0, ge=0)

    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    meta_keywords: Optional[str] = None

    model_config = {"extra": "ignore"}

    @model_validator(mode="after")
    def fill_slug(self) -> Article:
        if not self.slug.strip():
            self.slug = generate_slug(self.title)
        return self

    @property
    def seo_title(self) -> str:
        return self.meta_title or self.title

    @property
    def seo_description(self) -> str:
        return self.meta_description or self.excerpt
