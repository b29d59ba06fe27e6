"""Entity schemas: structural and semantic validators for every entity.

These models are the single source of truth for shape and format
constraints. Commands run them on their inputs and on the current state
they receive; adapters run them when rows come back from storage.

Relationships are value-held foreign keys (``project_id``,
``status_column_id``); lookups resolve through caller-supplied collections.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime
from enum import StrEnum
from typing import Annotated, Any, TypeVar
from uuid import UUID

import pydantic
from pydantic import (
    AwareDatetime,
    BaseModel,
    EmailStr,
    Field,
    StringConstraints,
    ValidationInfo,
    field_validator,
)

from candoo.domain.errors import ValidationError, Violation
from candoo.domain.tags import TAG_MAX_LENGTH, normalize_tag
from candoo.domain.ticket_keys import PREFIX_MAX_LENGTH, parse_ticket_key

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 10_000

NonEmptyStr = Annotated[str, StringConstraints(min_length=1)]
Prefix = Annotated[
    str,
    StringConstraints(min_length=1, max_length=PREFIX_MAX_LENGTH, pattern=r"^[A-Z][A-Z0-9]*$"),
]
TagName = Annotated[str, StringConstraints(min_length=1, max_length=TAG_MAX_LENGTH)]
Title = Annotated[str, StringConstraints(min_length=1, max_length=TITLE_MAX_LENGTH)]
Description = Annotated[str, StringConstraints(max_length=DESCRIPTION_MAX_LENGTH)]

_M = TypeVar("_M", bound=BaseModel)


class MembershipRole(StrEnum):
    """Access level of a user within an org."""

    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"


class Org(BaseModel):
    """Tenant root."""

    model_config = {"frozen": True}

    id: UUID
    name: NonEmptyStr
    created_at: AwareDatetime
    updated_at: AwareDatetime


class Membership(BaseModel):
    """Org to user join carrying the access level."""

    model_config = {"frozen": True}

    id: UUID
    org_id: UUID
    user_id: UUID
    role: MembershipRole
    created_at: AwareDatetime


class Project(BaseModel):
    """A board within an org. ``prefix`` feeds the ticket key codec."""

    model_config = {"frozen": True}

    id: UUID
    org_id: UUID
    name: NonEmptyStr
    prefix: Prefix
    created_at: AwareDatetime
    updated_at: AwareDatetime


class User(BaseModel):
    model_config = {"frozen": True}

    id: UUID
    email: EmailStr
    display_name: NonEmptyStr
    created_at: AwareDatetime


class Tag(BaseModel):
    """A project-scoped tag. ``name`` is stored in canonical form."""

    model_config = {"frozen": True}

    id: UUID
    project_id: UUID
    name: TagName
    created_at: AwareDatetime

    @field_validator("name")
    @classmethod
    def _canonical_name(cls, value: str) -> str:
        normalized = normalize_tag(value)
        if not normalized:
            msg = "tag name must not be blank"
            raise ValueError(msg)
        return normalized


class WorkflowColumn(BaseModel):
    """An ordered lane on a project's board."""

    model_config = {"frozen": True}

    id: UUID
    project_id: UUID
    name: NonEmptyStr
    position: int = Field(ge=0)
    created_at: AwareDatetime


class Ticket(BaseModel):
    """The mutable subject of every command.

    ``tags`` holds canonical tag names (see :func:`normalize_tag`);
    ``closed_at`` is set while the ticket is closed.
    """

    model_config = {"frozen": True}

    id: UUID
    project_id: UUID
    number: int = Field(ge=1)
    key: str
    title: Title
    description: Description = ""
    status_column_id: UUID
    assignee_id: UUID | None = None
    reporter_id: UUID
    tags: tuple[TagName, ...] = ()
    created_at: AwareDatetime
    updated_at: AwareDatetime
    closed_at: AwareDatetime | None = None

    @field_validator("key")
    @classmethod
    def _key_matches_number(cls, value: str, info: ValidationInfo) -> str:
        parsed = parse_ticket_key(value)
        if parsed is None:
            msg = "must have the form PREFIX-NUMBER"
            raise ValueError(msg)
        number = info.data.get("number")
        if number is not None and parsed.number != number:
            msg = f"number {parsed.number} does not match ticket number {number}"
            raise ValueError(msg)
        return value

    @field_validator("tags")
    @classmethod
    def _tags_unique(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        normalized = tuple(normalize_tag(t) for t in value)
        if any(not t for t in normalized):
            msg = "tag names must not be blank"
            raise ValueError(msg)
        if len(set(normalized)) != len(normalized):
            msg = "duplicate tag names"
            raise ValueError(msg)
        return normalized

    @field_validator("updated_at")
    @classmethod
    def _updated_after_created(cls, value: datetime, info: ValidationInfo) -> datetime:
        created_at = info.data.get("created_at")
        if created_at is not None and value < created_at:
            msg = "must not precede created_at"
            raise ValueError(msg)
        return value

    @property
    def is_closed(self) -> bool:
        return self.closed_at is not None


class Board(BaseModel):
    """A project together with its workflow columns, sorted by position."""

    model_config = {"frozen": True}

    project: Project
    columns: tuple[WorkflowColumn, ...] = Field(min_length=1)

    @field_validator("columns")
    @classmethod
    def _columns_consistent(
        cls, value: tuple[WorkflowColumn, ...], info: ValidationInfo
    ) -> tuple[WorkflowColumn, ...]:
        project = info.data.get("project")
        if project is not None and any(c.project_id != project.id for c in value):
            msg = "every column must belong to the board's project"
            raise ValueError(msg)
        positions = [c.position for c in value]
        if len(set(positions)) != len(positions):
            msg = "column positions must be distinct"
            raise ValueError(msg)
        return tuple(sorted(value, key=lambda c: c.position))


def validate_entity(model: type[_M], raw: _M | Mapping[str, Any]) -> _M:
    """Validate *raw* against *model*.

    Instances of *model* pass through untouched (they were validated on
    construction). Mappings are validated and converted.

    Raises:
        ValidationError: With one :class:`Violation` per failed constraint.
    """
    if isinstance(raw, model):
        return raw
    try:
        return model.model_validate(raw)
    except pydantic.ValidationError as exc:
        raise ValidationError.from_pydantic(exc) from exc


def validate_project_tags(tags: Iterable[Tag | Mapping[str, Any]]) -> list[Tag]:
    """Validate a tag catalogue, enforcing one tag per name within a project.

    Names compare in canonical form, so ``"UI"`` and ``" ui "`` collide.
    The same name may exist in different projects.

    Raises:
        ValidationError: A malformed tag, or one violation per duplicate,
            indexed by its position in *tags*.
    """
    validated: list[Tag] = []
    violations: list[Violation] = []
    seen: set[tuple[UUID, str]] = set()
    for index, raw in enumerate(tags):
        try:
            tag = validate_entity(Tag, raw)
        except ValidationError as exc:
            violations.extend(
                Violation(path=f"{index}.{v.path}", message=v.message, code=v.code)
                for v in exc.violations
            )
            continue
        scope = (tag.project_id, tag.name)
        if scope in seen:
            violations.append(
                Violation(
                    path=f"{index}.name",
                    message=f"tag {tag.name!r} already exists in this project",
                    code="duplicate",
                )
            )
        seen.add(scope)
        validated.append(tag)
    if violations:
        raise ValidationError(violations)
    return validated

