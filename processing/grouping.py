"""
Generic reshaping helpers for flat row collections.

group_by and to_lookup are the in-memory join primitives of the export:
rows fetched independently are keyed by account address here and looked
up by the assembler afterwards.

Keys are normalized to str before they are compared, so 1 and "1" land in
the same bucket. Rows whose key is None are skipped.
"""

from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, TypeVar

T = TypeVar("T")
V = TypeVar("V")

KeySelector = Callable[[T], Optional[Hashable]]


def _normalize_key(key: Hashable) -> str:
    if isinstance(key, str):
        return key
    if isinstance(key, bool):
        # spelled as in JSON
        return "true" if key else "false"
    return str(key)


def group_by(records: Iterable[T], key_of: KeySelector) -> Dict[str, List[T]]:
    """
    Groups records by a derived key.

    Args:
        records: Any iterable of records
        key_of: Returns the group key of a record, or None to skip the record

    Returns:
        Dict from key to the records with that key, in input order.
        Groups appear in the order their key was first seen.
    """
    groups: Dict[str, List[T]] = {}
    for record in records:
        key = key_of(record)
        if key is None:
            continue
        groups.setdefault(_normalize_key(key), []).append(record)
    return groups


def to_lookup(
    records: Iterable[T],
    key_of: KeySelector,
    value_of: Optional[Callable[[T], V]] = None,
) -> Dict[str, Any]:
    """
    Builds a key -> single value mapping.

    Without value_of every value is True, i.e. the result is a membership set.
    When several records share a key the last one wins; the key keeps the
    position where it was first seen.
    """
    lookup: Dict[str, Any] = {}
    for record in records:
        key = key_of(record)
        if key is None:
            continue
        lookup[_normalize_key(key)] = True if value_of is None else value_of(record)
    return lookup
