"""Article renderer — applies smartlinks to article bodies.

Fetches the keyword configuration from a `KeywordSource` and runs the
linkify engine exactly once per render. Output stays Markdown; turning it
into HTML is the front end's job.

Usage:
    renderer = ArticleRenderer(SettingsKeywordSource())
    body = renderer.render_body(article.content)
"""

from __future__ import annotations

from src.common.logging import setup_logging
from src.common.models import Article
from src.linkify.engine import KeywordLinker
from src.linkify.keywords import KeywordSource

logger = setup_logging(module_name="article_renderer")


class ArticleRenderer:
    """Linkifies article bodies with the current smartlink configuration."""

    def __init__(self, source: KeywordSource) -> None:
        self.source = source

    def render_body(self, body: str) -> str:
        """Return `body` with smartlinks applied.

        The configuration is read once per call. Never call this on its own
        output: the engine leaves existing links alone, but a changed
        configuration between calls would link the new keywords too.
        """
        if not body:
            return body

        config = self.source.get_config()
        if config.is_empty:
            return body

        linker = KeywordLinker(config.to_rules(), config.max_links_per_keyword)
        rendered = linker.apply(body)
        if rendered is not body:
            logger.debug("Applied smartlinks to body (%d chars)", len(body))
        return rendered

    def render_article(self, article: Article) -> Article:
        """Return a copy of `article` whose content has smartlinks applied."""
        return article.model_copy(update={"content": self.render_body(article.content)})
