"""Tag domain logic: canonicalization and deduplicated tag lists.

Canonical form: NFKC-normalized, whitespace-trimmed, case-folded. The
canonical value is what gets stored; there is no separate display casing.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable

TAG_MAX_LENGTH = 50


def normalize_tag(name: str) -> str:
    """Canonicalize a tag name for storage and equality.

    Examples:
        >>> normalize_tag("  Backend ")
        'backend'
        >>> normalize_tag("STRASSE") == normalize_tag("straße")
        True
    """
    return unicodedata.normalize("NFKC", name).strip().casefold()


def normalize_tags(names: Iterable[str]) -> list[str]:
    """Normalize each name, dropping blanks and later duplicates."""
    seen: set[str] = set()
    result: list[str] = []
    for name in names:
        normalized = normalize_tag(name)
        if normalized and normalized not in seen:
            seen.add(normalized)
            result.append(normalized)
    return result


def has_tag(tags: Iterable[str], name: str) -> bool:
    """Membership test under normalized equality."""
    target = normalize_tag(name)
    return any(normalize_tag(t) == target for t in tags)


def add_tag_to_list(tags: Iterable[str], name: str) -> list[str]:
    """Return a new list with *name* appended unless already present."""
    result = list(tags)
    if has_tag(result, name):
        return result
    result.append(normalize_tag(name))
    return result


def remove_tag_from_list(tags: Iterable[str], name: str) -> list[str]:
    """Return a new list without *name*. Removing an absent tag is a no-op."""
    target = normalize_tag(name)
    return [t for t in tags if normalize_tag(t) != target]
