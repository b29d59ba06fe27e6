"""Ticket key codec: ``PREFIX-NUMBER`` human-facing identifiers.

The prefix comes from the owning project; the number is a per-project
sequence counter allocated by the persistence layer, never by this module.

INVARIANT: ``parse_ticket_key(generate_ticket_key(p, n)) == (p, n)`` for
every valid prefix ``p`` and every ``n >= 0``.
"""

from __future__ import annotations

import re
from typing import NamedTuple

PREFIX_PATTERN = re.compile(r"^[A-Z][A-Z0-9]*$")
PREFIX_MAX_LENGTH = 10

TICKET_KEY_PATTERN = re.compile(r"^([A-Z][A-Z0-9]*)-([0-9]+)$")

# Word-bounded form used when scanning prose for mentions.
_MENTION_PATTERN = re.compile(r"(?<![A-Za-z0-9-])([A-Z][A-Z0-9]*)-([0-9]+)(?![A-Za-z0-9-])")


class TicketKey(NamedTuple):
    """A decoded ticket key."""

    prefix: str
    number: int

    def __str__(self) -> str:
        return generate_ticket_key(self.prefix, self.number)


def is_valid_prefix(prefix: str) -> bool:
    """Check *prefix* against the project-prefix rule (1-10 chars, ``^[A-Z][A-Z0-9]*$``)."""
    return len(prefix) <= PREFIX_MAX_LENGTH and PREFIX_PATTERN.fullmatch(prefix) is not None


def generate_ticket_key(prefix: str, number: int) -> str:
    """Build the ``{prefix}-{number}`` key.

    Raises:
        ValueError: If *prefix* is not a valid project prefix or *number*
            is negative. Both indicate a caller bug, not bad user input.
    """
    if not is_valid_prefix(prefix):
        msg = f"Invalid project prefix: {prefix!r}"
        raise ValueError(msg)
    if number < 0:
        msg = f"Ticket number must be non-negative, got {number}"
        raise ValueError(msg)
    return f"{prefix}-{number}"


def parse_ticket_key(key: str) -> TicketKey | None:
    """Decode *key*, or return None when it is not a ticket reference.

    Examples:
        >>> parse_ticket_key("ENG-42")
        TicketKey(prefix='ENG', number=42)
        >>> parse_ticket_key("eng-42") is None
        True
    """
    match = TICKET_KEY_PATTERN.fullmatch(key)
    if match is None:
        return None
    return TicketKey(prefix=match.group(1), number=int(match.group(2)))


def find_ticket_keys(text: str) -> list[TicketKey]:
    """Extract ticket mentions from free text, first occurrence order, deduplicated."""
    seen: set[TicketKey] = set()
    results: list[TicketKey] = []
    for match in _MENTION_PATTERN.finditer(text):
        found = TicketKey(prefix=match.group(1), number=int(match.group(2)))
        if found not in seen:
            seen.add(found)
            results.append(found)
    return results
