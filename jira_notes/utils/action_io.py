"""
Running the release-notes enrichment as a CI action step.
"""

import os
import sys
import uuid
import logging

from jira_notes.config.app_config import Config
from jira_notes.jira.jira_enricher import ReleaseNotesEnricher
from jira_notes.utils.log_utils import configure_app_logging


def set_output(name: str, value: str) -> None:
    """
    Publish a step output.

    Writes to the file named by GITHUB_OUTPUT using the multiline delimiter
    syntax, or prints the value when no output file is configured.
    """
    output_path = os.getenv("GITHUB_OUTPUT")
    if not output_path:
        print(value)
        return

    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    with open(output_path, 'a', encoding='utf-8') as f:
        f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
    logging.debug(f"Wrote output '{name}' ({len(value)} chars) to {output_path}")


def set_failed(message: str) -> None:
    """Report the run as failed with the given reason."""
    # Workflow commands are single-line; encode line breaks the way the runner expects
    escaped = message.replace('%', '%25').replace('\r', '%0D').replace('\n', '%0A')
    print(f"::error::{escaped}")
    sys.stdout.flush()


def run_action(inputs=None) -> int:
    """
    Run the release-notes enrichment as a CI step.

    Returns:
        int: Process exit code, 0 on success and 1 on failure
    """
    try:
        config = Config(inputs).get_enricher_config()
        report = ReleaseNotesEnricher(config).run()

        for outcome in report.tickets:
            logging.info(f"{outcome.ticket_id}: {outcome.message}")

        set_output("text", report.text)
        logging.info(f"text: {report.text}")
        return 0
    except Exception as e:
        logging.error(f"Release notes run failed: {str(e)}", exc_info=True)
        set_failed(str(e))
        return 1


def main() -> None:
    configure_app_logging()
    sys.exit(run_action())
