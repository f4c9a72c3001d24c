"""
Result Assembler

Turns raw extraction candidates into the final list: dedup by a key,
document order preserved unless a sort key is given, list-level cap, and
excerpt truncation with an ellipsis marker.
"""

from typing import Any, Callable, Hashable, Iterable, List, Optional, TypeVar

T = TypeVar('T')

ELLIPSIS = '...'


def truncate_excerpt(text: str, cap: int) -> str:
    """
    Cut text to cap characters, appending '...' only when something was cut

    Args:
        text: Excerpt source text
        cap: Maximum number of characters kept

    Returns:
        Text of length <= cap, or exactly cap + 3 when truncated
    """
    text = text or ''
    if len(text) <= cap:
        return text
    return text[:cap] + ELLIPSIS


def dedup(items: Iterable[T], key: Callable[[T], Hashable]) -> List[T]:
    """Keep the first item for every key, in encounter order"""
    seen = set()
    unique = []
    for item in items:
        item_key = key(item)
        if item_key in seen:
            continue
        seen.add(item_key)
        unique.append(item)
    return unique


def assemble(candidates: Iterable[T], limit: Optional[int] = None,
             dedup_key: Optional[Callable[[T], Hashable]] = None,
             sort_key: Optional[Callable[[T], Any]] = None) -> List[T]:
    """
    Build the final result list

    Args:
        candidates: Records in document order
        limit: Keep only the first N records (None keeps all)
        dedup_key: Field accessor used for dedup, first occurrence wins
        sort_key: Explicit presentation order (categories sort by name)

    Returns:
        Final list of records
    """
    results = list(candidates)

    if dedup_key is not None:
        results = dedup(results, dedup_key)

    if sort_key is not None:
        results = sorted(results, key=sort_key)

    if limit is not None:
        results = results[:limit]

    return results
