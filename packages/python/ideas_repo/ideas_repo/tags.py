"""Normalization of the tags field.

Clients send tags either as a list of strings or as a single comma-delimited
string. Both shapes collapse into one ordered list of unique, trimmed,
non-empty tags before any idea is written.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Sequence, Union

RawTagsInput = Union[str, Sequence[Any], None]


def _dedupe(values: Iterable[str]) -> List[str]:
    seen: set[str] = set()
    result: List[str] = []
    for value in values:
        if not value:
            continue
        if value in seen:
            continue
        seen.add(value)
        result.append(value)
    return result


def normalize_tags(raw: RawTagsInput) -> List[str]:
    """Return the canonical tag list for ``raw``.

    >>> normalize_tags("a, b ,,c")
    ['a', 'b', 'c']
    >>> normalize_tags(["a", "", "b"])
    ['a', 'b']
    >>> normalize_tags(None)
    []
    """

    if isinstance(raw, str):
        parts = raw.split(",")
    elif isinstance(raw, (list, tuple)):
        # Non-string entries are dropped rather than coerced.
        parts = [item for item in raw if isinstance(item, str)]
    else:
        return []
    return _dedupe(part.strip() for part in parts)
