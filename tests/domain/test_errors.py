"""Tests for the domain error taxonomy."""

from __future__ import annotations

import pydantic
import pytest
from pydantic import BaseModel, Field

from candoo.domain.errors import (
    AlreadyClosedError,
    ConflictError,
    DomainError,
    EmptyBoardError,
    InvalidColumnError,
    NotClosedError,
    NotMemberError,
    ValidationError,
    Violation,
)


class _Nested(BaseModel):
    count: int = Field(ge=0)


class _Outer(BaseModel):
    items: list[_Nested]


class TestErrorCodes:
    @pytest.mark.parametrize(
        "error_cls,code",
        [
            (InvalidColumnError, "INVALID_COLUMN"),
            (EmptyBoardError, "EMPTY_BOARD"),
            (AlreadyClosedError, "TICKET_ALREADY_CLOSED"),
            (NotClosedError, "TICKET_NOT_CLOSED"),
            (NotMemberError, "NOT_A_MEMBER"),
            (ConflictError, "CONFLICT"),
        ],
    )
    def test_stable_codes(self, error_cls: type[DomainError], code: str) -> None:
        err = error_cls("boom")
        assert isinstance(err, DomainError)
        assert err.code == code
        assert str(err) == "boom"

    def test_to_dict(self) -> None:
        err = InvalidColumnError("nope", detail={"column_id": "c1"})
        assert err.to_dict() == {
            "code": "INVALID_COLUMN",
            "message": "nope",
            "detail": {"column_id": "c1"},
        }

    def test_detail_defaults_empty(self) -> None:
        assert EmptyBoardError("empty").detail == {}


class TestValidationError:
    def test_single(self) -> None:
        err = ValidationError.single("title", "too long")
        assert err.violations == [Violation(path="title", message="too long")]
        assert err.message == "title: too long"
        assert err.code == "INVALID_INPUT"

    def test_message_joins_violations(self) -> None:
        err = ValidationError([Violation("a", "bad"), Violation("", "whole object")])
        assert err.message == "a: bad; whole object"

    def test_from_pydantic_dotted_paths(self) -> None:
        with pytest.raises(pydantic.ValidationError) as exc_info:
            _Outer.model_validate({"items": [{"count": 1}, {"count": -1}]})
        err = ValidationError.from_pydantic(exc_info.value)
        assert err.paths == ["items.1.count"]
        assert err.violations[0].code == "greater_than_equal"
        assert err.detail["violations"][0]["path"] == "items.1.count"
