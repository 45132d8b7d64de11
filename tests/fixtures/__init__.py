# Test fixtures
from .sample_documents import (
    ARTICLE_HTML,
    ARTICLE_MARKDOWN,
    GFM_HTML,
    GFM_MARKDOWN,
)

__all__ = [
    "ARTICLE_HTML",
    "ARTICLE_MARKDOWN",
    "GFM_HTML",
    "GFM_MARKDOWN",
]
