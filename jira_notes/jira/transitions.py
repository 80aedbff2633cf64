"""
Forward-only workflow transitions for released tickets.
"""

import logging
from typing import Any, Dict, List

from jira_notes.config.workflow import ENVIRONMENT_STATUS, status_ordinal
from jira_notes.exceptions.api_exceptions import TransitionUnavailableError
from jira_notes.jira.jira_client import TrackerClient
from jira_notes.models.jira_models import TicketInfo, TransitionOutcome, TransitionResult


def find_transition(transitions: List[Dict[str, Any]], target_status: str) -> Dict[str, Any]:
    """Return the first transition whose name contains the target status."""
    for transition in transitions:
        if target_status in transition.get('name', ''):
            return transition
    names = ", ".join(t.get('name', '?') for t in transitions) or "none"
    raise TransitionUnavailableError(
        f"No transition to '{target_status}' available (offered: {names})"
    )


class StatusTransitioner:
    """
    Moves tickets towards the status matching the release environment.

    Tickets never move backwards or sideways: a ticket already at or past the
    target status is left alone.
    """

    def __init__(self, client: TrackerClient, environment: str) -> None:
        if environment not in ENVIRONMENT_STATUS:
            raise ValueError(f"Unknown release environment: {environment}")
        self.client = client
        self.environment = environment
        self.target_status = ENVIRONMENT_STATUS[environment]

    def should_move(self, current_status: str) -> bool:
        return status_ordinal(current_status) < status_ordinal(self.target_status)

    def transition(self, ticket: TicketInfo) -> TransitionResult:
        """Advance a ticket to the target status when the workflow allows it."""
        if not self.should_move(ticket.status):
            message = (
                f"Not moving {ticket.id} from '{ticket.status}' to '{self.target_status}': "
                f"only forward transitions are allowed"
            )
            logging.info(message)
            return TransitionResult(
                ticket_id=ticket.id,
                outcome=TransitionOutcome.BLOCKED,
                from_status=ticket.status,
                to_status=self.target_status,
                message=message,
            )

        try:
            transitions = self.client.get_transitions(ticket.id)
            transition = find_transition(transitions, self.target_status)
            self.client.do_transition(ticket.id, transition['id'])
        except TransitionUnavailableError as e:
            message = f"Could not move {ticket.id} to '{self.target_status}': {str(e)}"
            logging.warning(message)
            return TransitionResult(
                ticket_id=ticket.id,
                outcome=TransitionOutcome.UNAVAILABLE,
                from_status=ticket.status,
                to_status=self.target_status,
                message=message,
            )
        except Exception as e:
            message = f"Error moving {ticket.id} to '{self.target_status}': {str(e)}"
            logging.error(message)
            return TransitionResult(
                ticket_id=ticket.id,
                outcome=TransitionOutcome.FAILED,
                from_status=ticket.status,
                to_status=self.target_status,
                message=message,
            )

        message = f"Moved {ticket.id} from '{ticket.status}' to '{self.target_status}'"
        logging.info(message)
        return TransitionResult(
            ticket_id=ticket.id,
            outcome=TransitionOutcome.MOVED,
            from_status=ticket.status,
            to_status=self.target_status,
            message=message,
        )
