"""
Exceptions raised while converting HTML to Markdown.
"""


class ConversionError(Exception):
    """Base class for every error raised by tomarkdown."""
    pass


class InputTypeError(ConversionError, TypeError):
    """Raised when the input to convert is not a string."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"{value!r} is not a string")


class FilterTypeError(ConversionError, TypeError):
    """Raised when a converter filter is not a tag name, a set of tag names, or a callable."""
    pass


class ConverterContractError(ConversionError, TypeError):
    """Raised when a replacement is not callable or does not return a string."""
    pass


class UnmatchedElementError(ConversionError, LookupError):
    """Raised when no converter matches an element and the policy forbids passthrough."""

    def __init__(self, tag_name: str):
        self.tag_name = tag_name
        super().__init__(f"No converter matches <{tag_name}>")


class SourceError(ConversionError):
    """Raised when a file or URL cannot be read for conversion."""
    pass
