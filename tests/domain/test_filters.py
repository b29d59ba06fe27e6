"""Tests for ticket filtering and filter merging."""

from __future__ import annotations

from collections.abc import Callable
from uuid import UUID, uuid4

import pytest

from candoo.domain.entities import Ticket, WorkflowColumn
from candoo.domain.filters import TicketFilters, filter_tickets, matches_filters, merge_filters


@pytest.fixture
def alice() -> UUID:
    return uuid4()


@pytest.fixture
def tickets(
    make_ticket: Callable[..., Ticket],
    column: Callable[[str], WorkflowColumn],
    alice: UUID,
) -> list[Ticket]:
    return [
        make_ticket("Login page crashes", tags=["bug", "frontend"]),
        make_ticket(
            "Speed up search index",
            description="The API is slow",
            tags=["backend", "perf"],
            assignee_id=alice,
            assignee_is_member=True,
        ),
        make_ticket(
            "Write release notes",
            status_column_id=column("In Progress").id,
            assignee_id=alice,
            assignee_is_member=True,
        ),
        make_ticket("Ship v1", status_column_id=column("Done").id, tags=["Backend"]),
    ]


class TestMatchesFilters:
    def test_empty_filters_match_everything(self, tickets: list[Ticket]) -> None:
        assert all(matches_filters(t, TicketFilters()) for t in tickets)

    def test_status_column(
        self, tickets: list[Ticket], column: Callable[[str], WorkflowColumn]
    ) -> None:
        f = TicketFilters(status_column_id=column("In Progress").id)
        assert [t.title for t in tickets if matches_filters(t, f)] == ["Write release notes"]

    def test_assignee(self, tickets: list[Ticket], alice: UUID) -> None:
        f = TicketFilters(assignee_id=alice)
        assert len(filter_tickets(tickets, f)) == 2

    def test_explicit_none_assignee_means_unassigned(self, tickets: list[Ticket]) -> None:
        f = TicketFilters(assignee_id=None)
        assert [t.title for t in filter_tickets(tickets, f)] == ["Login page crashes", "Ship v1"]

    def test_tag_is_case_insensitive(self, tickets: list[Ticket]) -> None:
        f = TicketFilters(tag="BACKEND")
        assert [t.title for t in filter_tickets(tickets, f)] == ["Speed up search index", "Ship v1"]

    def test_tags_require_all(self, tickets: list[Ticket]) -> None:
        f = TicketFilters(tags=("backend", "perf"))
        assert [t.title for t in filter_tickets(tickets, f)] == ["Speed up search index"]

    def test_search_title_and_description(self, tickets: list[Ticket]) -> None:
        assert [t.title for t in filter_tickets(tickets, TicketFilters(search="api"))] == [
            "Speed up search index"
        ]
        assert [t.title for t in filter_tickets(tickets, TicketFilters(search="LOGIN"))] == [
            "Login page crashes"
        ]

    def test_empty_search_matches_all(self, tickets: list[Ticket]) -> None:
        assert filter_tickets(tickets, TicketFilters(search="")) == tickets

    def test_closed(self, tickets: list[Ticket]) -> None:
        assert [t.title for t in filter_tickets(tickets, TicketFilters(closed=True))] == [
            "Ship v1"
        ]
        assert len(filter_tickets(tickets, TicketFilters(closed=False))) == 3

    def test_criteria_are_anded(self, tickets: list[Ticket], alice: UUID) -> None:
        f = TicketFilters(assignee_id=alice, tag="perf", search="search")
        assert [t.title for t in filter_tickets(tickets, f)] == ["Speed up search index"]
        f = TicketFilters(assignee_id=alice, tag="bug")
        assert filter_tickets(tickets, f) == []

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValueError):
            TicketFilters(priority="high")  # type: ignore[call-arg]


class TestFilterTickets:
    def test_preserves_order(self, tickets: list[Ticket]) -> None:
        reversed_input = list(reversed(tickets))
        result = filter_tickets(reversed_input, TicketFilters(closed=False))
        assert result == [t for t in reversed_input if not t.is_closed]

    @pytest.mark.parametrize(
        "criteria",
        [
            {},
            {"tag": "backend"},
            {"search": "s"},
            {"closed": False, "tags": ("bug",)},
            {"assignee_id": None, "search": "ship"},
        ],
    )
    def test_partition_law(self, tickets: list[Ticket], criteria: dict[str, object]) -> None:
        f = TicketFilters(**criteria)
        selected = filter_tickets(tickets, f)
        assert all(matches_filters(t, f) for t in selected)
        assert all(not matches_filters(t, f) for t in tickets if t not in selected)


class TestMergeFilters:
    def test_later_wins_per_field(self) -> None:
        merged = merge_filters(TicketFilters(tag="bug", search="x"), TicketFilters(tag="ui"))
        assert merged.tag == "ui"
        assert merged.search == "x"

    def test_unset_fields_do_not_override(self) -> None:
        column_id = uuid4()
        merged = merge_filters(TicketFilters(status_column_id=column_id), TicketFilters())
        assert merged.status_column_id == column_id

    def test_explicit_none_overrides(self) -> None:
        merged = merge_filters(TicketFilters(assignee_id=uuid4()), TicketFilters(assignee_id=None))
        assert merged.is_set("assignee_id")
        assert merged.assignee_id is None

    def test_no_filters(self) -> None:
        assert merge_filters().model_fields_set == set()

    def test_variadic(self) -> None:
        merged = merge_filters(
            TicketFilters(search="a"), TicketFilters(search="b"), TicketFilters(closed=True)
        )
        assert (merged.search, merged.closed) == ("b", True)
