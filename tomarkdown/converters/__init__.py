from .markdown import MARKDOWN_CONVERTERS
from .gfm import GFM_CONVERTERS

__all__ = ["MARKDOWN_CONVERTERS", "GFM_CONVERTERS"]
