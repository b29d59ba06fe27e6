"""Domain error taxonomy.

Every failure raised by the rules and command layers is a :class:`DomainError`
carrying a stable ``code`` that transports map onto protocol-level responses.
None of these are retried inside the core.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    import pydantic


class DomainError(Exception):
    """Base class for all core failures."""

    code: ClassVar[str] = "DOMAIN_ERROR"

    def __init__(self, message: str, *, detail: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail: dict[str, Any] = detail or {}

    def to_dict(self) -> dict[str, Any]:
        """Serializable ``{code, message, detail}`` payload for transports."""
        return {"code": self.code, "message": self.message, "detail": self.detail}


@dataclass(frozen=True)
class Violation:
    """A single violated constraint, indexed by dotted field path."""

    path: str
    message: str
    code: str = "invalid"


class ValidationError(DomainError):
    """Input or state does not satisfy the entity schemas."""

    code = "INVALID_INPUT"

    def __init__(self, violations: list[Violation], *, message: str | None = None) -> None:
        self.violations = list(violations)
        if message is None:
            message = "; ".join(
                f"{v.path}: {v.message}" if v.path else v.message for v in self.violations
            )
        super().__init__(
            message,
            detail={
                "violations": [
                    {"path": v.path, "message": v.message, "code": v.code}
                    for v in self.violations
                ]
            },
        )

    @classmethod
    def single(cls, path: str, message: str, code: str = "invalid") -> ValidationError:
        return cls([Violation(path=path, message=message, code=code)])

    @classmethod
    def from_pydantic(cls, exc: pydantic.ValidationError) -> ValidationError:
        """Translate pydantic's error list into path-indexed violations."""
        violations = [
            Violation(
                path=".".join(str(part) for part in err["loc"]),
                message=err["msg"],
                code=err["type"],
            )
            for err in exc.errors()
        ]
        return cls(violations)

    @property
    def paths(self) -> list[str]:
        return [v.path for v in self.violations]


class InvalidColumnError(DomainError):
    """Column reference does not exist or crosses a project boundary."""

    code = "INVALID_COLUMN"


class EmptyBoardError(DomainError):
    """Project has no workflow columns where one is required."""

    code = "EMPTY_BOARD"


class AlreadyClosedError(DomainError):
    code = "TICKET_ALREADY_CLOSED"


class NotClosedError(DomainError):
    code = "TICKET_NOT_CLOSED"


class NotMemberError(DomainError):
    """Assignee is not a member of the ticket's org."""

    code = "NOT_A_MEMBER"


class ConflictError(DomainError):
    """Optimistic-concurrency failure.

    Reserved for the persistence layer; the core never raises it.
    """

    code = "CONFLICT"
