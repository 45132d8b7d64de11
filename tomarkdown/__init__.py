"""
tomarkdown - HTML to Markdown Converter

Converts HTML fragments and documents into Markdown by folding the parsed
element tree through an ordered, extensible set of converter rules.
"""

from .core import ConversionOptions, ToMarkdown, convert, normalize
from .errors import (
    ConversionError,
    ConverterContractError,
    FilterTypeError,
    InputTypeError,
    SourceError,
    UnmatchedElementError,
)
from .rules import ByPredicate, ByTag, ByTagSet, Converter, Registry
from .tree import is_block, is_void, outer

__version__ = "1.0.0"

__all__ = [
    "ConversionOptions",
    "ToMarkdown",
    "convert",
    "normalize",
    "ConversionError",
    "ConverterContractError",
    "FilterTypeError",
    "InputTypeError",
    "SourceError",
    "UnmatchedElementError",
    "ByPredicate",
    "ByTag",
    "ByTagSet",
    "Converter",
    "Registry",
    "is_block",
    "is_void",
    "outer",
]
