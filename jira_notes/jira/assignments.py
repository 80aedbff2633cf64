"""
Release (fix version) and sprint assignment for released tickets.
"""

import logging
from typing import Iterator, List, Optional, Sequence

from jira_notes.config.workflow import SPRINT_BATCH_SIZE
from jira_notes.jira.jira_client import TrackerClient
from jira_notes.models.jira_models import (
    AssignmentOutcome,
    AssignmentResult,
    ReleaseInfo,
    SprintBatchResult,
    SprintInfo,
    TicketInfo,
)


def resolve_release(client: TrackerClient, release_id: str) -> Optional[ReleaseInfo]:
    """
    Look up a fix version and the project it belongs to.

    Returns:
        The release, or None when it cannot be retrieved
    """
    try:
        version = client.get_version(release_id)
        release = ReleaseInfo(
            id=str(version.get('id', release_id)),
            name=version['name'],
            project_id=str(version['projectId']) if version.get('projectId') is not None else None,
        )
    except Exception as e:
        logging.error(f"Failed to fetch release {release_id}, release assignment disabled: {str(e)}")
        return None

    if release.project_id:
        try:
            project = client.get_project(release.project_id)
            release.project_name = project.get('name') or project.get('key')
        except Exception as e:
            logging.warning(f"Failed to fetch project {release.project_id} of release {release.name}: {str(e)}")

    logging.info(f"Using release {release.name} (id {release.id})")
    return release


def resolve_sprint(client: TrackerClient, sprint_id: str) -> Optional[SprintInfo]:
    """Look up a sprint, or return None when it cannot be retrieved."""
    try:
        sprint = client.get_sprint(sprint_id)
        info = SprintInfo(
            id=str(sprint.get('id', sprint_id)),
            name=sprint['name'],
            state=sprint.get('state'),
        )
    except Exception as e:
        logging.error(f"Failed to fetch sprint {sprint_id}, sprint assignment disabled: {str(e)}")
        return None

    logging.info(f"Using sprint {info.name} (id {info.id}, state {info.state})")
    return info


def release_label(release: ReleaseInfo, environment: str) -> str:
    return f"{release.name}_{environment}_cicd".replace(" ", "_")


def assign_release(
    client: TrackerClient,
    ticket: TicketInfo,
    release: ReleaseInfo,
    environment: str,
) -> AssignmentResult:
    """
    Attach the release to a ticket that has none yet.

    An existing release is never overwritten. The release label is added to
    the ticket's labels in the same update.
    """
    if ticket.releases:
        message = (
            f"{ticket.id} already has release {', '.join(ticket.releases)}, "
            f"not assigning {release.name}"
        )
        logging.info(message)
        return AssignmentResult(ticket_id=ticket.id, outcome=AssignmentOutcome.SKIPPED, message=message)

    label = release_label(release, environment)
    fields = {
        "fixVersions": [{"id": release.id}],
        "labels": ticket.labels + [label],
    }
    try:
        client.edit_issue(ticket.id, fields)
    except Exception as e:
        message = f"Failed to assign release {release.name} to {ticket.id}: {str(e)}"
        logging.error(message)
        return AssignmentResult(ticket_id=ticket.id, outcome=AssignmentOutcome.FAILED, label=label, message=message)

    message = f"Assigned release {release.name} to {ticket.id} with label {label}"
    logging.info(message)
    return AssignmentResult(ticket_id=ticket.id, outcome=AssignmentOutcome.ASSIGNED, label=label, message=message)


def batched(items: Sequence[str], size: int) -> Iterator[List[str]]:
    """Split items into consecutive lists of at most ``size`` elements."""
    if size < 1:
        raise ValueError("Batch size must be positive")
    for start in range(0, len(items), size):
        yield list(items[start:start + size])


def assign_sprint(
    client: TrackerClient,
    sprint: SprintInfo,
    ticket_ids: Sequence[str],
    batch_size: int = SPRINT_BATCH_SIZE,
) -> List[SprintBatchResult]:
    """
    Move tickets into a sprint in batches.

    Batches are submitted in order. A failing batch is logged and does not
    stop the remaining ones.
    """
    results = []
    for batch in batched(ticket_ids, batch_size):
        try:
            client.move_issues_to_sprint(sprint.id, batch)
        except Exception as e:
            message = f"Failed to move {len(batch)} tickets ({batch[0]}..{batch[-1]}) to sprint {sprint.name}: {str(e)}"
            logging.error(message)
            results.append(SprintBatchResult(
                sprint_id=sprint.id, ticket_ids=batch, outcome=AssignmentOutcome.FAILED, message=message
            ))
            continue

        message = f"Moved {len(batch)} tickets to sprint {sprint.name}"
        logging.info(message)
        results.append(SprintBatchResult(
            sprint_id=sprint.id, ticket_ids=batch, outcome=AssignmentOutcome.ASSIGNED, message=message
        ))
    return results
