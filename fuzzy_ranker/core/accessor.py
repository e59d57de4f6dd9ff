"""Dotted-path field access over nested records."""

from collections.abc import Mapping
from typing import Any, List, NamedTuple, Optional


class FieldValue(NamedTuple):
    """A leaf value resolved from a record, with its position in a list field."""
    
    value: Any
    array_index: int = -1


def is_leaf(value: Any) -> bool:
    """Whether a value is a searchable string or number."""
    return isinstance(value, (str, int, float)) and not isinstance(value, bool)


def leaf_text(value: Any) -> str:
    """Render a leaf as searchable text; integral floats drop their ``.0``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _is_list(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _get_segment(obj: Any, segment: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(segment)
    return getattr(obj, segment, None)


def _collect(obj: Any, path: Optional[str], values: List[FieldValue], array_index: int) -> None:
    if not path:
        # No path left: this is the object we care about
        if _is_list(obj):
            for element in obj:
                _collect(element, None, values, array_index)
        else:
            values.append(FieldValue(obj, array_index))
        return
    
    first, _, remaining = path.partition(".")
    value = _get_segment(obj, first)
    if value is None:
        return
    
    if not remaining and is_leaf(value):
        values.append(FieldValue(value, array_index))
    elif _is_list(value):
        # Search each item in the list
        for index, element in enumerate(value):
            _collect(element, remaining, values, index if array_index == -1 else array_index)
    elif remaining:
        _collect(value, remaining, values, array_index)


def deep_value(item: Any, path: str) -> List[FieldValue]:
    """
    Resolve a dotted path against a record.
    
    Mappings are indexed by key and other objects by attribute. Lists met
    along the way are flattened, each element resolving the rest of the path.
    Missing segments yield no values.
    
    Args:
        item: Record to read from
        path: Dotted path, e.g. ``"author.firstName"``
        
    Returns:
        Leaf values in document order, tagged with their index in the
        outermost list crossed (-1 when no list was crossed)
    """
    values: List[FieldValue] = []
    _collect(item, path, values, -1)
    return values
