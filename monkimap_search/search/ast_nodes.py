"""AST data classes for parsed search queries.

Every node is immutable and compares by value, so a parsed query can be
compared directly against one built by hand::

    SearchQuery.of(Kind("park"), ImagesCount(Range.between(1, 10)))

``str()`` of any node gives its canonical query text (see
:mod:`monkimap_search.search.render`).
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Generic, TypeVar

T = TypeVar("T")

# Lexical alphabet of a date value (ISO 8601 dates, week dates, timestamps)
DATE_PATTERN = re.compile(r"[0-9:+\-TWZ]+")


class _Node:
    """Mixin giving nodes their canonical text as ``str()``."""

    __slots__ = ()

    def __str__(self) -> str:
        from monkimap_search.search.render import render

        return render(self)


# ---------------------------------------------------------------------------
# Value tokens
# ---------------------------------------------------------------------------


class ExtendedBool(_Node, enum.Enum):
    """A boolean with a third ``only`` state (``draft:only``)."""

    TRUE = "true"
    FALSE = "false"
    ONLY = "only"

    @classmethod
    def from_bool(cls, value: bool) -> ExtendedBool:
        return cls.TRUE if value else cls.FALSE

    @property
    def as_bool(self) -> bool | None:
        """The plain boolean, or None for ``ONLY``."""
        if self is ExtendedBool.ONLY:
            return None
        return self is ExtendedBool.TRUE


@dataclass(frozen=True)
class UserId(_Node):
    """A 36-character user identifier (UUID-shaped, not validated further)."""

    value: str


@dataclass(frozen=True)
class Username(_Node):
    """A username, written ``@name`` in queries."""

    name: str


UserToken = UserId | Username


@dataclass(frozen=True)
class DateToken(_Node):
    """A date as typed by the user.

    The text is kept verbatim so rendering is exact. Only its lexical shape
    is checked; ``date_value`` gives the calendar value when the text is an
    ISO 8601 form Python can read.
    """

    text: str

    def __post_init__(self) -> None:
        if not DATE_PATTERN.fullmatch(self.text):
            raise ValueError(f"Invalid date literal: {self.text!r}")

    @property
    def date_value(self) -> date | datetime | None:
        try:
            if "T" in self.text:
                return datetime.fromisoformat(self.text)
            return date.fromisoformat(self.text)
        except ValueError:
            return None


class RangeOperator(enum.Enum):
    """Comparison carried by a :class:`Range`. Values are the query symbols."""

    EQUAL_TO = ""
    LESS_THAN = "<"
    GREATER_THAN = ">"
    LESS_THAN_OR_EQUAL_TO = "<="
    GREATER_THAN_OR_EQUAL_TO = ">="
    BETWEEN = ".."


@dataclass(frozen=True)
class Range(_Node, Generic[T]):
    """A comparison against one value, or an interval ``value..upper``.

    ``upper`` is set if and only if the operator is ``BETWEEN``.
    """

    operator: RangeOperator
    value: T
    upper: T | None = None

    def __post_init__(self) -> None:
        if (self.operator is RangeOperator.BETWEEN) != (self.upper is not None):
            raise ValueError(f"{self.operator.name} range with upper={self.upper!r}")

    @classmethod
    def equal_to(cls, value: T) -> Range[T]:
        return cls(RangeOperator.EQUAL_TO, value)

    @classmethod
    def less_than(cls, value: T) -> Range[T]:
        return cls(RangeOperator.LESS_THAN, value)

    @classmethod
    def greater_than(cls, value: T) -> Range[T]:
        return cls(RangeOperator.GREATER_THAN, value)

    @classmethod
    def less_than_or_equal_to(cls, value: T) -> Range[T]:
        return cls(RangeOperator.LESS_THAN_OR_EQUAL_TO, value)

    @classmethod
    def greater_than_or_equal_to(cls, value: T) -> Range[T]:
        return cls(RangeOperator.GREATER_THAN_OR_EQUAL_TO, value)

    @classmethod
    def between(cls, lower: T, upper: T) -> Range[T]:
        return cls(RangeOperator.BETWEEN, lower, upper)


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Word(_Node):
    """A bare keyword."""

    text: str


@dataclass(frozen=True)
class QuotedString(_Node):
    """A ``"quoted phrase"``; may be empty."""

    text: str


@dataclass(frozen=True)
class IsDraft(_Node):
    """``draft:true``, ``draft:false`` or ``draft:only``."""

    value: ExtendedBool


@dataclass(frozen=True)
class Kind(_Node):
    """``kind:<identifier>``; the identifier may be empty."""

    text: str


@dataclass(frozen=True)
class Category(_Node):
    """``category:<identifier>``; the identifier may be empty."""

    text: str


@dataclass(frozen=True)
class Creator(_Node):
    """``creator:@name`` or ``creator:<user id>``."""

    user: UserToken


@dataclass(frozen=True)
class Creation(_Node):
    """``created:<date range>``."""

    range: Range[DateToken]


@dataclass(frozen=True)
class ImagesCount(_Node):
    """``images:<count range>``."""

    range: Range[int]


@dataclass(frozen=True)
class PropertiesCount(_Node):
    """``properties:<kind>:<count range>``."""

    kind: str
    range: Range[int]


@dataclass(frozen=True)
class HasProperty(_Node):
    """``properties:<kind>/<id>:<bool>``."""

    kind: str
    id: str
    value: bool


Filter = (
    Word
    | QuotedString
    | IsDraft
    | Kind
    | Category
    | Creator
    | Creation
    | ImagesCount
    | PropertiesCount
    | HasProperty
)


@dataclass(frozen=True)
class SearchQuery(_Node):
    """Top-level search query: filters in the order they were typed."""

    filters: tuple[Filter, ...] = ()

    def __post_init__(self) -> None:
        # Accept any iterable (e.g. a list) but store a tuple
        object.__setattr__(self, "filters", tuple(self.filters))

    @classmethod
    def of(cls, *filters: Filter) -> SearchQuery:
        return cls(filters)

    def __iter__(self):
        return iter(self.filters)

    def __len__(self) -> int:
        return len(self.filters)
