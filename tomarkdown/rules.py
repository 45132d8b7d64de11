"""
Converter rules and the registry that orders them.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Union

from .errors import ConverterContractError, FilterTypeError
from .tree import tag_name


@dataclass(frozen=True)
class ByTag:
    """Matches elements with exactly this tag name, ignoring case."""
    name: str

    def __post_init__(self):
        object.__setattr__(self, "name", self.name.lower())


@dataclass(frozen=True)
class ByTagSet:
    """Matches elements whose tag name is one of ``names``."""
    names: frozenset

    def __post_init__(self):
        object.__setattr__(self, "names", frozenset(name.lower() for name in self.names))


@dataclass(frozen=True)
class ByPredicate:
    """Matches elements for which ``predicate(node)`` is true."""
    predicate: Callable


Filter = Union[ByTag, ByTagSet, ByPredicate]


def as_filter(value) -> Filter:
    """
    Turn a filter shorthand into a Filter.

    Accepts an existing Filter, a tag name, a list/tuple/set of tag names,
    or a callable taking the node.

    Raises:
        FilterTypeError: If ``value`` is none of those.
    """
    if isinstance(value, (ByTag, ByTagSet, ByPredicate)):
        return value
    if isinstance(value, str):
        return ByTag(value)
    if callable(value):
        return ByPredicate(value)
    if isinstance(value, (list, tuple, set, frozenset)):
        if all(isinstance(name, str) for name in value):
            return ByTagSet(frozenset(value))
    raise FilterTypeError(
        f"`filter` needs to be a string, a collection of strings, or a function, got {value!r}"
    )


def matches(filter_: Filter, node) -> bool:
    """Check whether ``filter_`` selects ``node``."""
    match filter_:
        case ByTag(name=name):
            return tag_name(node) == name
        case ByTagSet(names=names):
            return tag_name(node) in names
        case ByPredicate(predicate=predicate):
            return bool(predicate(node))
    raise FilterTypeError(f"Unsupported filter: {filter_!r}")


@dataclass(frozen=True)
class Converter:
    """
    A rule turning a matched element into Markdown.

    ``replacement`` is called as ``replacement(content, node)`` where
    ``content`` is the already-converted Markdown of the element's children,
    and must return a string.
    """
    filter: Filter
    replacement: Callable[[str, object], str]
    name: str = ""

    def __post_init__(self):
        object.__setattr__(self, "filter", as_filter(self.filter))

    def matches(self, node) -> bool:
        return matches(self.filter, node)

    def check_contract(self) -> None:
        if not callable(self.replacement):
            raise ConverterContractError(
                f"`replacement` of {self.label} needs to be a function that returns a string"
            )

    def apply(self, content: str, node) -> str:
        """Run the replacement and make sure it produced text."""
        self.check_contract()
        result = self.replacement(content, node)
        if not isinstance(result, str):
            raise ConverterContractError(
                f"`replacement` of {self.label} returned {type(result).__name__}, expected str"
            )
        return result

    @property
    def label(self) -> str:
        if self.name:
            return self.name
        match self.filter:
            case ByTag(name=name):
                return name
            case ByTagSet(names=names):
                return "|".join(sorted(names))
            case ByPredicate(predicate=predicate):
                return getattr(predicate, "__name__", "predicate")
        return "converter"


def as_converter(value) -> Converter:
    """Accept a Converter or a mapping with ``filter`` and ``replacement`` keys."""
    if isinstance(value, Converter):
        return value
    if isinstance(value, Mapping):
        return Converter(
            filter=value.get("filter"),
            replacement=value.get("replacement"),
            name=value.get("name", ""),
        )
    raise ConverterContractError(
        f"A converter needs a filter and a replacement, got {value!r}"
    )


class Registry:
    """
    An immutable, ordered set of converters.

    Earlier converters take precedence: the first one whose filter matches
    an element is the one applied to it.
    """

    def __init__(self, converters: Iterable = ()):
        self._converters = tuple(as_converter(converter) for converter in converters)

    @classmethod
    def compose(cls, overrides: Iterable = (), extensions: Iterable = (), base: Iterable = ()) -> "Registry":
        """Stack caller overrides over extension rules over base rules."""
        return cls([*overrides, *extensions, *base])

    def find(self, node) -> Optional[Converter]:
        """
        Return the first converter matching ``node``, or None.

        Raises:
            ConverterContractError: If the matching converter's replacement
                is not callable.
        """
        for converter in self._converters:
            if converter.matches(node):
                converter.check_contract()
                return converter
        return None

    def __iter__(self):
        return iter(self._converters)

    def __len__(self) -> int:
        return len(self._converters)

    def __repr__(self) -> str:
        return f"Registry({[converter.label for converter in self._converters]})"
