"""
Ticket reference extraction and ticket metadata retrieval.
"""

import re
import logging
from typing import List

from jira_notes.jira.jira_client import TrackerClient
from jira_notes.models.jira_models import TicketInfo

TICKET_REFERENCE_PATTERN = re.compile(r"\[([A-Z]{2,}-\d+)\]")


def extract_ticket_ids(text: str) -> List[str]:
    """
    Find every bracketed ticket reference in the text.

    Args:
        text: Free-form text such as release-note markdown

    Returns:
        Ticket ids in order of appearance, duplicates included
    """
    if not text:
        return []
    return TICKET_REFERENCE_PATTERN.findall(text)


def fetch_ticket_info(ticket_id: str, client: TrackerClient) -> TicketInfo:
    """
    Retrieve the metadata of a ticket.

    Any failure is logged and reported as an empty TicketInfo so that a
    single missing ticket never aborts the run.
    """
    try:
        issue = client.get_issue(ticket_id)
        fields = issue.get('fields') or {}
        info = TicketInfo(
            id=ticket_id,
            summary=fields.get('summary') or "",
            link=f"{client.base_url}/browse/{ticket_id}",
            status=(fields.get('status') or {}).get('name', ""),
            releases=[version.get('name', "") for version in fields.get('fixVersions') or []],
            labels=list(fields.get('labels') or []),
        )
        logging.debug(f"Fetched {ticket_id}: status={info.status}, releases={info.releases}")
        return info
    except Exception as e:
        logging.error(f"Failed to fetch ticket {ticket_id}: {str(e)}")
        return TicketInfo.empty()
