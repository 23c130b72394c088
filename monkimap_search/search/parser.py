"""Parse MonkiMap search syntax into an AST."""

from __future__ import annotations

import logging
from importlib import resources
from typing import Any

from lark import Lark, Token, Transformer, UnexpectedInput
from lark.exceptions import VisitError

from monkimap_search.exceptions import SearchParseError
from monkimap_search.search.ast_nodes import (
    Category,
    Creation,
    Creator,
    DateToken,
    ExtendedBool,
    Filter,
    HasProperty,
    ImagesCount,
    IsDraft,
    Kind,
    PropertiesCount,
    QuotedString,
    Range,
    RangeOperator,
    SearchQuery,
    UserId,
    Username,
    Word,
)

logger = logging.getLogger(__name__)

UINT8_MAX = 255

# What each grammar terminal means to someone typing a query
_EXPECTATIONS: dict[str, str] = {
    "QUOTED_STRING": "a quoted string",
    "WORD": "a word",
    "_DRAFT": "a qualifier keyword",
    "_KIND": "a qualifier keyword",
    "_CATEGORY": "a qualifier keyword",
    "_CREATOR": "a qualifier keyword",
    "_CREATED": "a qualifier keyword",
    "_IMAGES": "a qualifier keyword",
    "_PROPERTIES": "a qualifier keyword",
    "IDENTIFIER": "an identifier",
    "BOOL": "'true' or 'false'",
    "ONLY": "'only'",
    "USERNAME": "an @username",
    "USER_ID": "a 36-character user id",
    "COMPARATOR": "a comparison operator",
    "UINT8": "a number from 0 to 255",
    "DATE": "a date",
    "TEXT": "a value",
    "_WS": "whitespace",
    "_COLON": "':'",
    "_SLASH": "'/'",
    "_RANGE_SEP": "'..'",
    "$END": "end of input",
}

_COMPARATORS: dict[str, RangeOperator] = {
    "<": RangeOperator.LESS_THAN,
    ">": RangeOperator.GREATER_THAN,
    "<=": RangeOperator.LESS_THAN_OR_EQUAL_TO,
    ">=": RangeOperator.GREATER_THAN_OR_EQUAL_TO,
}


def _load_grammar() -> str:
    """Load the Lark grammar from the package resources."""
    return resources.files("monkimap_search.search").joinpath("grammar.lark").read_text()


_GRAMMAR_TEXT = _load_grammar()

_parser = Lark(
    _GRAMMAR_TEXT,
    parser="lalr",
    lexer="contextual",
    start=["start", "filter", "text_range"],
    maybe_placeholders=True,
)


class _SearchTransformer(Transformer):
    """Transform Lark parse tree into AST data classes."""

    def start(self, items: list[Any]) -> SearchQuery:
        return SearchQuery(items)

    # Filters

    def quoted_string(self, items: list[Any]) -> QuotedString:
        return QuotedString(items[0])

    def word(self, items: list[Any]) -> Word:
        return Word(str(items[0]))

    def is_draft(self, items: list[Any]) -> IsDraft:
        return IsDraft(items[0])

    def kind(self, items: list[Any]) -> Kind:
        # [IDENTIFIER] leaves None behind for "kind:" with nothing after it
        return Kind(items[0] or "")

    def category(self, items: list[Any]) -> Category:
        return Category(items[0] or "")

    def creator(self, items: list[Any]) -> Creator:
        return Creator(items[0])

    def creation(self, items: list[Any]) -> Creation:
        return Creation(items[0])

    def images_count(self, items: list[Any]) -> ImagesCount:
        return ImagesCount(items[0])

    def properties_count(self, items: list[Any]) -> PropertiesCount:
        kind, range_ = items
        return PropertiesCount(kind=kind or "", range=range_)

    def has_property(self, items: list[Any]) -> HasProperty:
        kind, property_id, value = items
        return HasProperty(kind=kind or "", id=property_id or "", value=value)

    # Value tokens

    def bool_token(self, items: list[Any]) -> ExtendedBool:
        return ExtendedBool.from_bool(items[0])

    def only(self, items: list[Any]) -> ExtendedBool:
        return ExtendedBool.ONLY

    def username(self, items: list[Any]) -> Username:
        return Username(items[0])

    def user_id(self, items: list[Any]) -> UserId:
        return UserId(items[0])

    # Ranges (shared by every value grammar)

    def comparison(self, items: list[Any]) -> Range:
        op, value = items
        return Range(_COMPARATORS[op], value)

    def between(self, items: list[Any]) -> Range:
        return Range.between(items[0], items[1])

    def equal_to(self, items: list[Any]) -> Range:
        return Range.equal_to(items[0])

    # Terminals

    def QUOTED_STRING(self, token: Token) -> str:
        # Strip surrounding quotes
        return str(token)[1:-1]

    def IDENTIFIER(self, token: Token) -> str:
        return str(token)

    def BOOL(self, token: Token) -> bool:
        return token == "true"

    def USERNAME(self, token: Token) -> str:
        return str(token)[1:]

    def USER_ID(self, token: Token) -> str:
        return str(token)

    def COMPARATOR(self, token: Token) -> str:
        return str(token)

    def UINT8(self, token: Token) -> int:
        value = int(token)
        if value > UINT8_MAX:
            raise ValueError(f"{token} is out of range (0-{UINT8_MAX})")
        return value

    def DATE(self, token: Token) -> DateToken:
        return DateToken(str(token))

    def TEXT(self, token: Token) -> str:
        return str(token)


_transformer = _SearchTransformer()


def _describe_expected(names: set[str] | frozenset[str] | None) -> tuple[str, ...]:
    if not names:
        return ()
    return tuple(sorted({_EXPECTATIONS.get(name, name) for name in names}))


def _to_parse_error(
    text: str, e: UnexpectedInput, offset: int, end: int
) -> SearchParseError:
    """Translate a Lark error on ``text[offset:end]`` into a SearchParseError."""
    token = getattr(e, "token", None)
    if token is not None and token.type == "$END":
        position = end
    else:
        position = offset + (e.pos_in_stream or 0)

    names = getattr(e, "allowed", None) or getattr(e, "expected", None)
    expected = _describe_expected(names)
    message = None
    if names and "QUOTED_STRING" in names and text[position : position + 1] == '"':
        expected = ("a closing '\"'",)
        message = "unterminated quoted string"
    return SearchParseError(text, position, expected, message)


def _parse(text: str, start: str, offset: int = 0, end: int | None = None) -> Any:
    """Parse ``text[offset:end]`` from ``start`` and transform the result.

    Positions in raised errors are relative to the full ``text``.
    """
    if end is None:
        end = len(text)
    try:
        tree = _parser.parse(text[offset:end], start=start)
        return _transformer.transform(tree)
    except UnexpectedInput as e:
        raise _to_parse_error(text, e, offset, end) from e
    except VisitError as e:
        if not isinstance(e.orig_exc, ValueError):
            raise
        position = offset
        if isinstance(e.obj, Token) and e.obj.start_pos is not None:
            position += e.obj.start_pos
        raise SearchParseError(text, position, message=str(e.orig_exc)) from e.orig_exc


def parse_query(query_string: str) -> SearchQuery:
    """Parse a search query string into a SearchQuery AST.

    Filters are separated by whitespace; surrounding whitespace is ignored.
    An empty or all-whitespace string gives an empty query. There is no
    partial result: one malformed filter fails the whole query.

    Args:
        query_string: The search query to parse.

    Returns:
        A SearchQuery AST representing the parsed query.

    Raises:
        SearchParseError: If the query cannot be parsed.
    """
    stripped = query_string.strip()
    if not stripped:
        return SearchQuery()

    offset = len(query_string) - len(query_string.lstrip())
    try:
        query = _parse(query_string, "start", offset, offset + len(stripped))
    except SearchParseError as e:
        logger.debug("Rejected query %r at %d: %s", query_string, e.position, e.message)
        raise
    logger.debug("Parsed %d filter(s) from %r", len(query.filters), query_string)
    return query


def parse_filter(filter_string: str) -> Filter:
    """Parse exactly one filter; surrounding whitespace is an error.

    Raises:
        SearchParseError: If the string is not a single well-formed filter.
    """
    return _parse(filter_string, "filter")


def parse_range(range_string: str) -> Range[str]:
    """Parse a range over bounded strings (``>=abc``, ``a..b``, ``abc``).

    A value runs up to the next whitespace or ``.``, so ``..`` always
    separates the bounds of an interval.

    Raises:
        SearchParseError: If the string is not a single well-formed range.
    """
    return _parse(range_string, "text_range")


def validate(query_string: str) -> bool:
    """Return whether ``query_string`` is a well-formed search query."""
    try:
        parse_query(query_string)
    except SearchParseError:
        return False
    return True
