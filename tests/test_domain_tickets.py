"""
Tests for the tickets domain layer.

Tests entities, the status history, the workflow rules and mention
parsing in isolation. No external dependencies or IO required.
"""

from datetime import datetime, timezone

import pytest

from app.domain.tickets.entities import (
    ChecklistItem,
    Ticket,
    TicketChecklist,
    TicketFilters,
    TicketPriority,
    TicketStatus,
    UserRole,
    percentage,
)
from app.domain.tickets.errors import (
    BrokenTransitionChainError,
    InconsistentChecklistError,
    InvalidChecklistItemError,
    InvalidStatusTransitionError,
    InvalidTicketStateError,
    PermissionDeniedError,
)
from app.domain.tickets.mentions import parse_mentions
from app.domain.tickets.status_history import StatusHistory, StatusTransition
from app.domain.tickets.workflow import (
    allowed_targets,
    can_view,
    ensure_can_assign,
    ensure_can_change_status,
    ensure_can_edit,
    ensure_can_rate,
    ensure_transition_allowed,
)

NOW = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)


def _item(item_id: str, completed: bool) -> ChecklistItem:
    if completed:
        return ChecklistItem(
            id=item_id, label=item_id, completed=True, completed_at=NOW, completed_by="u1"
        )
    return ChecklistItem(id=item_id, label=item_id)


def _transition(from_status, to_status) -> StatusTransition:
    return StatusTransition(
        from_status=from_status,
        to_status=to_status,
        transitioned_at=NOW,
        transitioned_by="u1",
    )


def _ticket(opened_by: str = "u-req", assigned_to: str | None = None) -> Ticket:
    history = StatusHistory.from_transitions([_transition(None, TicketStatus.OPEN)])
    return Ticket(
        id=1,
        title="Leaking tap",
        description="Kitchen tap leaks",
        category="maintenance",
        priority=TicketPriority.HIGH,
        opened_by=opened_by,
        assigned_to=assigned_to,
        created_at=NOW,
        updated_at=NOW,
        status_history=history,
    )


class TestChecklist:
    """Tests for checklist items and derived counters."""

    def test_progress_is_rounded(self) -> None:
        checklist = TicketChecklist.from_items(
            [_item("a", True), _item("b", True), _item("c", False)]
        )

        assert checklist.completed_count == 2
        assert checklist.total_count == 3
        assert checklist.progress == 67

    def test_empty_checklist_has_zero_progress(self) -> None:
        checklist = TicketChecklist.from_items([])

        assert (checklist.completed_count, checklist.total_count, checklist.progress) == (0, 0, 0)

    def test_exact_half_rounds_up(self) -> None:
        one_of_eight = TicketChecklist.from_items(
            [_item("a", True)] + [_item(f"o{i}", False) for i in range(7)]
        )
        five_of_eight = TicketChecklist.from_items(
            [_item(f"c{i}", True) for i in range(5)]
            + [_item(f"o{i}", False) for i in range(3)]
        )

        assert one_of_eight.progress == 13
        assert five_of_eight.progress == 63

    def test_fully_completed(self) -> None:
        checklist = TicketChecklist.from_items([_item("a", True)])

        assert checklist.progress == 100

    def test_order_is_preserved(self) -> None:
        checklist = TicketChecklist.from_items([_item("b", False), _item("a", False)])

        assert [i.id for i in checklist.items] == ["b", "a"]

    def test_inconsistent_counters_rejected(self) -> None:
        with pytest.raises(InconsistentChecklistError):
            TicketChecklist(items=(_item("a", True),), completed_count=0, total_count=1, progress=0)

    def test_completed_item_requires_metadata(self) -> None:
        with pytest.raises(InvalidChecklistItemError):
            ChecklistItem(id="a", label="a", completed=True)

    def test_open_item_rejects_metadata(self) -> None:
        with pytest.raises(InvalidChecklistItemError):
            ChecklistItem(id="a", label="a", completed=False, completed_by="u1")

    @pytest.mark.parametrize(
        ("value", "maximum", "expected"),
        [
            (0, 100, 0),
            (50, 100, 50),
            (150, 100, 100),
            (-5, 100, 0),
            (1, 3, 33),
            (2, 3, 67),
            (1, 8, 13),
            (5, 8, 63),
            (1, 200, 1),
            (3, 0, 0),
        ],
    )
    def test_percentage_is_clamped(self, value, maximum, expected) -> None:
        assert percentage(value, maximum) == expected


class TestStatusHistory:
    """Tests for the append-only status audit trail."""

    def test_valid_chain(self) -> None:
        history = StatusHistory.from_transitions(
            [
                _transition(None, "open"),
                _transition("open", "in_progress"),
                _transition("in_progress", "closed"),
            ]
        )

        assert len(history) == 3
        assert history.current_status == "closed"

    def test_broken_link_rejected(self) -> None:
        with pytest.raises(BrokenTransitionChainError):
            StatusHistory.from_transitions(
                [_transition(None, "open"), _transition("in_progress", "closed")]
            )

    def test_first_entry_must_start_from_none(self) -> None:
        with pytest.raises(BrokenTransitionChainError):
            StatusHistory().append(_transition("open", "closed"))

    def test_failed_append_leaves_history_untouched(self) -> None:
        history = StatusHistory.from_transitions([_transition(None, "open")])

        with pytest.raises(BrokenTransitionChainError):
            history.append(_transition("closed", "open"))

        assert len(history) == 1
        assert history.current_status == "open"

    def test_entries_cannot_be_mutated_through_accessor(self) -> None:
        history = StatusHistory.from_transitions([_transition(None, "open")])

        entries = history.entries

        assert isinstance(entries, tuple)
        with pytest.raises(AttributeError):
            entries[0].to_status = "closed"

    def test_enum_and_string_statuses_chain(self) -> None:
        history = StatusHistory.from_transitions([_transition(None, TicketStatus.OPEN)])

        history.append(_transition("open", TicketStatus.IN_REVIEW))

        assert history.current_status == TicketStatus.IN_REVIEW


class TestTicket:
    """Tests for the Ticket aggregate."""

    def test_status_follows_history(self) -> None:
        ticket = _ticket()

        ticket.record_transition(_transition(TicketStatus.OPEN, TicketStatus.IN_PROGRESS))

        assert ticket.status is TicketStatus.IN_PROGRESS

    def test_closing_sets_closed_at(self) -> None:
        ticket = _ticket()
        ticket.record_transition(_transition(TicketStatus.OPEN, TicketStatus.IN_PROGRESS))

        ticket.record_transition(_transition(TicketStatus.IN_PROGRESS, TicketStatus.CLOSED))

        assert ticket.closed_at == NOW

    def test_history_note_on_closed_ticket_keeps_closed_at(self) -> None:
        ticket = _ticket()
        ticket.record_transition(_transition(TicketStatus.OPEN, TicketStatus.IN_PROGRESS))
        ticket.record_transition(_transition(TicketStatus.IN_PROGRESS, TicketStatus.CLOSED))
        later = StatusTransition(
            from_status=TicketStatus.CLOSED,
            to_status=TicketStatus.CLOSED,
            transitioned_at=datetime(2024, 6, 1, tzinfo=timezone.utc),
            transitioned_by="u-staff",
            note="Assigned to Sam",
        )

        ticket.record_transition(later)

        assert ticket.closed_at == NOW
        assert ticket.updated_at == later.transitioned_at


class TestWorkflow:
    """Tests for status workflow rules and permissions."""

    @pytest.mark.parametrize(
        ("current", "target"),
        [
            (TicketStatus.OPEN, TicketStatus.IN_REVIEW),
            (TicketStatus.IN_REVIEW, TicketStatus.IN_PROGRESS),
            (TicketStatus.IN_PROGRESS, TicketStatus.CLOSED),
            (TicketStatus.AWAITING_REQUESTER, TicketStatus.IN_PROGRESS),
            (TicketStatus.CANCELLED, TicketStatus.OPEN),
        ],
    )
    def test_allowed_moves(self, current, target) -> None:
        ensure_transition_allowed(current, target)

    @pytest.mark.parametrize(
        ("current", "target"),
        [
            (TicketStatus.OPEN, TicketStatus.CLOSED),
            (TicketStatus.OPEN, TicketStatus.IN_PROGRESS),
            (TicketStatus.CLOSED, TicketStatus.OPEN),
            (TicketStatus.IN_REVIEW, TicketStatus.OPEN),
            (TicketStatus.OPEN, TicketStatus.OPEN),
        ],
    )
    def test_forbidden_moves(self, current, target) -> None:
        with pytest.raises(InvalidStatusTransitionError) as info:
            ensure_transition_allowed(current, target)

        assert info.value.status_code == 400
        assert current.value in info.value.message

    def test_closed_is_terminal(self) -> None:
        assert allowed_targets(TicketStatus.CLOSED) == frozenset()

    def test_staff_may_change_status(self) -> None:
        ensure_can_change_status(_ticket(), "u-staff", UserRole.STAFF)

    def test_assignee_may_change_status(self) -> None:
        ensure_can_change_status(_ticket(assigned_to="u-x"), "u-x", UserRole.REQUESTER)

    def test_requester_may_not_change_status(self) -> None:
        with pytest.raises(PermissionDeniedError):
            ensure_can_change_status(_ticket(), "u-req", UserRole.REQUESTER)

    def test_requester_sees_only_own_tickets(self) -> None:
        ticket = _ticket(opened_by="u-req")

        assert can_view(ticket, "u-req", UserRole.REQUESTER)
        assert not can_view(ticket, "u-other", UserRole.REQUESTER)
        assert can_view(ticket, "u-other", UserRole.MANAGER)

    def test_assignment_does_not_grant_visibility(self) -> None:
        ticket = _ticket(opened_by="u-req", assigned_to="u-fixer")

        assert not can_view(ticket, "u-fixer", UserRole.REQUESTER)

    def test_opener_may_edit_only_while_open(self) -> None:
        ticket = _ticket(opened_by="u-req")
        ensure_can_edit(ticket, "u-req", UserRole.REQUESTER)
        ticket.record_transition(_transition(TicketStatus.OPEN, TicketStatus.IN_REVIEW))

        with pytest.raises(PermissionDeniedError):
            ensure_can_edit(ticket, "u-req", UserRole.REQUESTER)
        ensure_can_edit(ticket, "u-staff", UserRole.STAFF)

    def test_only_staff_may_assign(self) -> None:
        ensure_can_assign("u-staff", UserRole.MANAGER)

        with pytest.raises(PermissionDeniedError):
            ensure_can_assign("u-req", UserRole.REQUESTER)

    def test_rating_requires_opener_and_closed_ticket(self) -> None:
        ticket = _ticket(opened_by="u-req")

        with pytest.raises(InvalidTicketStateError):
            ensure_can_rate(ticket, "u-req")
        with pytest.raises(PermissionDeniedError):
            ensure_can_rate(ticket, "u-other")


class TestMentions:
    """Tests for comment mention parsing."""

    def test_positions_are_offsets_of_at_sign(self) -> None:
        text = "Hi @ann, please ask @bob"

        mentions = parse_mentions(text, [("1", "ann"), ("2", "bob")])

        assert [(m.user_id, m.position) for m in mentions] == [("1", 3), ("2", 20)]
        assert all(text[m.position] == "@" for m in mentions)

    def test_unknown_names_ignored(self) -> None:
        assert parse_mentions("ping @carol", [("1", "ann")]) == []

    def test_email_is_not_a_mention(self) -> None:
        assert parse_mentions("mail ann@ann.com", [("1", "ann.com")]) == []

    def test_longest_name_wins(self) -> None:
        mentions = parse_mentions("cc @Ann Lee", [("1", "Ann"), ("2", "Ann Lee")])

        assert [(m.user_id, m.user_name) for m in mentions] == [("2", "Ann Lee")]

    def test_prefix_of_longer_word_is_not_a_mention(self) -> None:
        assert parse_mentions("@annabel here", [("1", "ann")]) == []

    def test_repeated_mentions_recorded_each_time(self) -> None:
        mentions = parse_mentions("@ann and again @ann", [("1", "ann")])

        assert [m.position for m in mentions] == [0, 15]


class TestTicketFilters:
    """Tests for list filtering criteria."""

    def test_empty_filters_match_everything(self) -> None:
        assert TicketFilters().matches(_ticket())

    def test_text_search_is_case_insensitive_and_covers_location(self) -> None:
        ticket = _ticket()
        ticket.location = "Basement laundry"

        assert TicketFilters(q="KITCHEN").matches(ticket)
        assert TicketFilters(q="laundry").matches(ticket)
        assert not TicketFilters(q="roof").matches(ticket)

    def test_criteria_are_combined(self) -> None:
        ticket = _ticket(assigned_to="u-fixer")

        assert TicketFilters(priority=TicketPriority.HIGH, assigned_to="u-fixer").matches(ticket)
        assert not TicketFilters(priority=TicketPriority.HIGH, category="cleaning").matches(ticket)
        assert not TicketFilters(status=TicketStatus.CLOSED).matches(ticket)
