"""Render search AST nodes back to text.

Three forms are produced:

- ``render``: the canonical query text. ``parse_query(render(q)) == q`` for
  every query the parser can produce.
- ``render_debug``: a tagged form telling apart nodes whose canonical text
  coincides, e.g. ``.word(category)`` vs ``.category(x)``.
- ``to_dict``: a JSON-ready structure for machine consumers.
"""

from __future__ import annotations

from typing import Any

from monkimap_search.search.ast_nodes import (
    Category,
    Creation,
    Creator,
    DateToken,
    ExtendedBool,
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

# Debug tag of each range operator
_RANGE_TAGS: dict[RangeOperator, str] = {
    RangeOperator.EQUAL_TO: "eq",
    RangeOperator.LESS_THAN: "lt",
    RangeOperator.GREATER_THAN: "gt",
    RangeOperator.LESS_THAN_OR_EQUAL_TO: "le",
    RangeOperator.GREATER_THAN_OR_EQUAL_TO: "ge",
    RangeOperator.BETWEEN: "between",
}


def _bool_text(value: bool) -> str:
    return "true" if value else "false"


def _value_text(value: Any) -> str:
    """Canonical text of a range bound (int, str or DateToken)."""
    if isinstance(value, bool):
        return _bool_text(value)
    if isinstance(value, (int, str)):
        return str(value)
    return render(value)


def _render_range(range_: Range) -> str:
    if range_.operator is RangeOperator.BETWEEN:
        return f"{_value_text(range_.value)}..{_value_text(range_.upper)}"
    return f"{range_.operator.value}{_value_text(range_.value)}"


def render(node: Any) -> str:
    """Render a query, filter or token as canonical query text."""
    if isinstance(node, SearchQuery):
        return " ".join(render(f) for f in node.filters)
    if isinstance(node, Word):
        return node.text
    if isinstance(node, QuotedString):
        return f'"{node.text}"'
    if isinstance(node, IsDraft):
        return f"draft:{render(node.value)}"
    if isinstance(node, Kind):
        return f"kind:{node.text}"
    if isinstance(node, Category):
        return f"category:{node.text}"
    if isinstance(node, Creator):
        return f"creator:{render(node.user)}"
    if isinstance(node, Creation):
        return f"created:{render(node.range)}"
    if isinstance(node, ImagesCount):
        return f"images:{render(node.range)}"
    if isinstance(node, PropertiesCount):
        return f"properties:{node.kind}:{render(node.range)}"
    if isinstance(node, HasProperty):
        return f"properties:{node.kind}/{node.id}:{_bool_text(node.value)}"
    if isinstance(node, ExtendedBool):
        return node.value
    if isinstance(node, UserId):
        return node.value
    if isinstance(node, Username):
        return f"@{node.name}"
    if isinstance(node, DateToken):
        return node.text
    if isinstance(node, Range):
        return _render_range(node)
    raise TypeError(f"Cannot render {type(node).__name__}")


def _debug_value(value: Any) -> str:
    if isinstance(value, bool):
        return _bool_text(value)
    if isinstance(value, (int, str)):
        return str(value)
    return render_debug(value)


def render_debug(node: Any) -> str:
    """Render a query, filter or token in the tagged debug form."""
    if isinstance(node, SearchQuery):
        return " ".join(render_debug(f) for f in node.filters)
    if isinstance(node, Word):
        return f".word({node.text})"
    if isinstance(node, QuotedString):
        return f".quotedString({node.text})"
    if isinstance(node, IsDraft):
        return f".isDraft({render_debug(node.value)})"
    if isinstance(node, Kind):
        return f".kind({node.text})"
    if isinstance(node, Category):
        return f".category({node.text})"
    if isinstance(node, Creator):
        return f".creator({render_debug(node.user)})"
    if isinstance(node, Creation):
        return f".creation({render_debug(node.range)})"
    if isinstance(node, ImagesCount):
        return f".imagesCount({render_debug(node.range)})"
    if isinstance(node, PropertiesCount):
        return f".propertiesCount({node.kind},{render_debug(node.range)})"
    if isinstance(node, HasProperty):
        return f".hasProperty({node.kind},{node.id},{_bool_text(node.value)})"
    if isinstance(node, ExtendedBool):
        if node is ExtendedBool.ONLY:
            return ".only"
        return f".bool({node.value})"
    if isinstance(node, UserId):
        return f".userId({node.value})"
    if isinstance(node, Username):
        return f".username({node.name})"
    if isinstance(node, DateToken):
        return f".date({node.text})"
    if isinstance(node, Range):
        tag = _RANGE_TAGS[node.operator]
        if node.operator is RangeOperator.BETWEEN:
            return f".{tag}({_debug_value(node.value)},{_debug_value(node.upper)})"
        return f".{tag}({_debug_value(node.value)})"
    raise TypeError(f"Cannot render {type(node).__name__}")


def _range_dict(range_: Range) -> dict[str, Any]:
    def bound(value: Any) -> Any:
        return value.text if isinstance(value, DateToken) else value

    data: dict[str, Any] = {"op": _RANGE_TAGS[range_.operator], "value": bound(range_.value)}
    if range_.operator is RangeOperator.BETWEEN:
        data["upper"] = bound(range_.upper)
    return data


def to_dict(node: Any) -> Any:
    """Convert a query (to a list) or a filter (to a dict) for JSON output."""
    if isinstance(node, SearchQuery):
        return [to_dict(f) for f in node.filters]
    if isinstance(node, Word):
        return {"type": "word", "value": node.text}
    if isinstance(node, QuotedString):
        return {"type": "quoted_string", "value": node.text}
    if isinstance(node, IsDraft):
        return {"type": "draft", "value": node.value.value}
    if isinstance(node, Kind):
        return {"type": "kind", "value": node.text}
    if isinstance(node, Category):
        return {"type": "category", "value": node.text}
    if isinstance(node, Creator):
        if isinstance(node.user, Username):
            return {"type": "creator", "username": node.user.name}
        return {"type": "creator", "user_id": node.user.value}
    if isinstance(node, Creation):
        return {"type": "created", "range": _range_dict(node.range)}
    if isinstance(node, ImagesCount):
        return {"type": "images", "range": _range_dict(node.range)}
    if isinstance(node, PropertiesCount):
        return {"type": "properties_count", "kind": node.kind, "range": _range_dict(node.range)}
    if isinstance(node, HasProperty):
        return {"type": "has_property", "kind": node.kind, "id": node.id, "value": node.value}
    if isinstance(node, Range):
        return _range_dict(node)
    raise TypeError(f"Cannot convert {type(node).__name__}")
