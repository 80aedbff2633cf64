"""
Tests for the forward-only status transitions.
"""

import logging

import pytest

from jira_notes.exceptions.api_exceptions import JiraFetchError, TransitionUnavailableError
from jira_notes.jira.transitions import StatusTransitioner, find_transition
from jira_notes.models.jira_models import TicketInfo, TransitionOutcome


def ticket(status, ticket_id="AB-12"):
    return TicketInfo(id=ticket_id, summary="s", link="l", status=status)


def test_backward_move_is_blocked(tracker):
    tracker.add_issue("AB-12", status="Stage")
    transitioner = StatusTransitioner(tracker, "stage")
    # Dev is not a release environment; pin the target directly
    transitioner.target_status = "Dev"

    result = transitioner.transition(ticket("Stage"))

    assert result.outcome is TransitionOutcome.BLOCKED
    assert tracker.calls_to("get_transitions") == []
    assert tracker.calls_to("do_transition") == []


def test_same_status_is_a_no_op(tracker, caplog):
    transitioner = StatusTransitioner(tracker, "preprod")

    with caplog.at_level(logging.INFO):
        result = transitioner.transition(ticket("Preprod"))

    assert result.outcome is TransitionOutcome.BLOCKED
    assert tracker.calls == []
    assert "only forward transitions" in caplog.text


def test_forward_move_invokes_exactly_one_transition(tracker):
    tracker.add_issue("AB-12", status="To Do")
    transitioner = StatusTransitioner(tracker, "production")

    result = transitioner.transition(ticket("To Do"))

    assert result.moved
    assert tracker.calls_to("do_transition") == [("AB-12", "51")]
    assert tracker.issues["AB-12"]["fields"]["status"]["name"] == "Done"


def test_unknown_current_status_moves_forward(tracker):
    tracker.add_issue("AB-12", status="Backlog")

    result = StatusTransitioner(tracker, "stage").transition(ticket("Backlog"))

    assert result.moved
    assert tracker.calls_to("do_transition") == [("AB-12", "31")]


def test_transition_name_is_matched_by_substring():
    transitions = [{"id": "1", "name": "Start"}, {"id": "2", "name": "Ship to Preprod now"}]
    assert find_transition(transitions, "Preprod")["id"] == "2"

    with pytest.raises(TransitionUnavailableError):
        find_transition(transitions, "Done")


def test_missing_transition_is_reported_not_raised(tracker):
    tracker.add_issue("AB-12", status="Dev")
    tracker.transitions = [{"id": "11", "name": "Start Progress", "to": {"name": "In Progress"}}]

    result = StatusTransitioner(tracker, "stage").transition(ticket("Dev"))

    assert result.outcome is TransitionOutcome.UNAVAILABLE
    assert tracker.calls_to("do_transition") == []


def test_transition_error_is_reported_not_raised(tracker):
    def broken(issue_key):
        raise JiraFetchError("Error listing transitions: 500", status_code=500)

    tracker.get_transitions = broken

    result = StatusTransitioner(tracker, "stage").transition(ticket("Dev"))

    assert result.outcome is TransitionOutcome.FAILED
    assert "500" in result.message


def test_unknown_environment_is_rejected(tracker):
    with pytest.raises(ValueError):
        StatusTransitioner(tracker, "qa")
