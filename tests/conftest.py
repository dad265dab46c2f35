"""Shared test fixtures for the smartlink engine."""

import sys
from pathlib import Path

import pytest

# Ensure src is importable
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.common.models import SmartlinkSettings
from src.linkify.keywords import StaticKeywordSource


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def destination() -> str:
    return "https://x.test"


@pytest.fixture
def sample_body() -> str:
    """A realistic article body with links, images and code."""
    return (
        "# AI in Finance\n"
        "\n"
        "AI is changing how ETF portfolios are built. "
        "Read [our AI primer](https://blog.test/ai-primer) first.\n"
        "\n"
        "![AI chart](https://cdn.test/ai.png)\n"
        "\n"
        "Run `pip install ai` or see https://ai.example.com for details.\n"
    )


@pytest.fixture
def sample_settings_row() -> dict:
    """Return a `settings` row as the backend returns it."""
    return {
        "id": 1,
        "smartlink_url": "https://smart.test/go",
        "smartlink_keywords": "AI, ETF, ,crypto",
        "banner_header": "<div>ad</div>",
        "banner_sidebar": None,
    }


@pytest.fixture
def settings_row(sample_settings_row: dict) -> SmartlinkSettings:
    return SmartlinkSettings(**sample_settings_row)


@pytest.fixture
def static_source(destination: str) -> StaticKeywordSource:
    return StaticKeywordSource(destination=destination, raw_keywords="AI, ETF")
