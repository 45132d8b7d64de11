"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest
from bs4 import BeautifulSoup

# Add the project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from tomarkdown.core import ConversionOptions, ToMarkdown
from tests.fixtures import ARTICLE_HTML, GFM_HTML


# ============================================================================
# Pytest Hooks
# ============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "integration: mark as integration test")
    config.addinivalue_line("markers", "network: mark as requiring network access")


# ============================================================================
# Engine Fixtures
# ============================================================================


@pytest.fixture
def engine():
    """Create a converter with the base rules only."""
    return ToMarkdown()


@pytest.fixture
def gfm_engine():
    """Create a converter with the GitHub-flavoured rules enabled."""
    return ToMarkdown(ConversionOptions(gfm=True))


@pytest.fixture
def strict_engine():
    """Create a converter that refuses elements without a rule."""
    return ToMarkdown(ConversionOptions(unmatched="error"))


# ============================================================================
# Tree Fixtures
# ============================================================================


@pytest.fixture
def make_soup():
    """Parse markup with the same builder the engine uses."""
    def _make_soup(html):
        return BeautifulSoup(html, "html.parser")
    return _make_soup


# ============================================================================
# Temporary File Fixtures
# ============================================================================


@pytest.fixture
def temp_html_file(tmp_path):
    """Create a temporary HTML file."""
    file_path = tmp_path / "article.html"
    file_path.write_text(ARTICLE_HTML, encoding="utf-8")
    return file_path


@pytest.fixture
def temp_gfm_file(tmp_path):
    """Create a temporary HTML file with a table."""
    file_path = tmp_path / "table page.html"
    file_path.write_text(GFM_HTML, encoding="utf-8")
    return file_path
