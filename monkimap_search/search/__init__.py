"""Search query parsing and rendering for MonkiMap search-bar syntax."""

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
    UserToken,
    Word,
)
from monkimap_search.search.parser import parse_filter, parse_query, parse_range, validate
from monkimap_search.search.render import render, render_debug, to_dict

__all__ = [
    "Category",
    "Creation",
    "Creator",
    "DateToken",
    "ExtendedBool",
    "Filter",
    "HasProperty",
    "ImagesCount",
    "IsDraft",
    "Kind",
    "PropertiesCount",
    "QuotedString",
    "Range",
    "RangeOperator",
    "SearchQuery",
    "UserId",
    "UserToken",
    "Username",
    "Word",
    "parse_filter",
    "parse_query",
    "parse_range",
    "render",
    "render_debug",
    "to_dict",
    "validate",
]
