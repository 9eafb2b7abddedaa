from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, TypeVar

T = TypeVar("T")


def _field(item: Any, key: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(key)
    return getattr(item, key, None)


def group_by(items: Iterable[T], key: str) -> Dict[str, List[T]]:
    """
    Partition records by the string form of one field.

    Works on plain dict records and on typed rows alike. Keys appear in
    first-seen order and each group keeps the input order. A missing field
    groups under "None".
    """
    groups: Dict[str, List[T]] = {}
    for item in items:
        groups.setdefault(str(_field(item, key)), []).append(item)
    return groups
