import logging
import time
from typing import Any, Dict, Optional, Tuple

from jira_notes.jira.assignments import assign_release, assign_sprint, resolve_release, resolve_sprint
from jira_notes.jira.jira_client import JiraAPIWrapper, TrackerClient
from jira_notes.jira.ticket_info import extract_ticket_ids, fetch_ticket_info
from jira_notes.jira.transitions import StatusTransitioner
from jira_notes.models.jira_models import ReleaseInfo, RunReport, TicketOutcome
from jira_notes.utils.markdown_utils import (
    CONVERTERS,
    annotate_note,
    beautify_note,
    prepend_lines,
    summary_lines,
)
from jira_notes.exceptions.api_exceptions import JiraFetchError


class ReleaseNotesEnricher:
    """
    Enrich release-note markdown with Jira ticket data and move the tickets
    along the release workflow.

    Tickets are processed one at a time. Problems with a single ticket are
    logged and recorded in the report; only configuration and client setup
    errors abort the run.
    """

    def __init__(self, config: Dict[str, Any], client: Optional[TrackerClient] = None) -> None:
        self.config = config
        self.environment = config['release_env']
        self.client = client or self._create_client()
        self.transitioner = StatusTransitioner(self.client, self.environment)
        self.convert = CONVERTERS[config.get('output_format', 'slack')]

    def _create_client(self) -> JiraAPIWrapper:
        try:
            jira_wrapper = JiraAPIWrapper(
                jira_username=self.config['jira_username'],
                jira_api_token=self.config['jira_api_key'],
                jira_instance_url=self.config['jira_url'],
                ssl_verify=self.config.get('ssl_verify', True),
                request_timeout=self.config.get('request_timeout', 30),
            )
            logging.info("JiraAPIWrapper created successfully")
            return jira_wrapper
        except Exception as e:
            logging.error(f"Error creating JiraAPIWrapper: {str(e)}")
            raise JiraFetchError(f"Error creating JiraAPIWrapper: {str(e)}")

    def process_ticket(
        self,
        ticket_id: str,
        markdown: str,
        release: Optional[ReleaseInfo] = None,
        annotate: bool = True,
    ) -> Tuple[str, TicketOutcome]:
        """
        Fetch, annotate, transition and optionally assign a release to one ticket.

        Args:
            ticket_id: Ticket id as referenced in the markdown
            markdown: Current release-note markdown
            release: Release to assign, if any
            annotate: Whether to rewrite the ticket's references in the markdown

        Returns:
            Tuple[str, TicketOutcome]: The updated markdown and the ticket's outcome
        """
        info = fetch_ticket_info(ticket_id, self.client)
        if not info.found:
            message = f"Ticket {ticket_id} not found, skipping"
            logging.warning(message)
            return markdown, TicketOutcome(ticket_id=ticket_id, message=message)

        annotated = annotate_note(markdown, info) if annotate else markdown
        outcome = TicketOutcome(
            ticket_id=ticket_id,
            found=True,
            annotated=annotated != markdown,
        )

        outcome.transition = self.transitioner.transition(info)

        if release is not None:
            outcome.release = assign_release(self.client, info, release, self.environment)

        outcome.message = outcome.transition.message
        return annotated, outcome

    def run(self, markdown: Optional[str] = None) -> RunReport:
        """
        Run the whole pipeline on the configured (or given) markdown.

        Returns:
            RunReport: Final text plus what happened to every ticket
        """
        start_time = time.time()
        if markdown is None:
            markdown = self.config.get('markdown', "")

        release_id = self.config.get('release_id')
        sprint_id = self.config.get('sprint_id')
        release = resolve_release(self.client, release_id) if release_id else None
        sprint = resolve_sprint(self.client, sprint_id) if sprint_id else None

        ticket_ids = extract_ticket_ids(markdown)
        logging.info(f"Found {len(ticket_ids)} ticket references: {', '.join(ticket_ids) or 'none'}")

        outcomes = []
        annotated_ids = set()
        for ticket_id in ticket_ids:
            markdown, outcome = self.process_ticket(
                ticket_id, markdown, release, annotate=ticket_id not in annotated_ids
            )
            if outcome.found:
                annotated_ids.add(ticket_id)
            outcomes.append(outcome)

        sprint_batches = []
        if sprint is not None and ticket_ids:
            sprint_batches = assign_sprint(self.client, sprint, ticket_ids)

        markdown = prepend_lines(markdown, summary_lines(self.environment, release, sprint))
        markdown = beautify_note(markdown)
        text = self.convert(markdown)

        found = sum(1 for outcome in outcomes if outcome.found)
        logging.info(
            f"Processed {found} of {len(outcomes)} ticket references "
            f"in {time.time() - start_time:.2f} seconds"
        )

        return RunReport(
            text=text,
            markdown=markdown,
            environment=self.environment,
            tickets=outcomes,
            sprint_batches=sprint_batches,
            release=release,
            sprint=sprint,
        )
