"""
Blueprint for release notes functions.
"""

import logging
import json

import azure.functions as func

from jira_notes.exceptions.api_exceptions import ConfigurationError, HttpUnauthorizedError, JiraFetchError
from jira_notes.jira.jira_enricher import ReleaseNotesEnricher
from jira_notes.config.app_config import Config

# Create blueprint
release_notes_bp = func.Blueprint()


def _error_response(message, status_code: int) -> func.HttpResponse:
    return func.HttpResponse(
        body=json.dumps({"status": "error", "message": message}),
        mimetype="application/json",
        status_code=status_code
    )


@release_notes_bp.route(route="release-notes/annotate", methods=["POST"])
@release_notes_bp.function_name(name="release_notes_handler")
async def release_notes_handler(req: func.HttpRequest) -> func.HttpResponse:
    """
    HTTP handler to enrich release notes with Jira data and move the tickets.

    The JSON body carries the same named inputs as the CI step.
    """
    logger = logging.getLogger('azure.functions')

    try:
        inputs = req.get_json()
    except ValueError:
        logger.error("Request body is not valid JSON")
        return _error_response("Request body must be a JSON object", 400)

    if not isinstance(inputs, dict):
        return _error_response("Request body must be a JSON object", 400)

    logger.info(f"Received release notes request for environment: {inputs.get('releaseEnv')}")

    try:
        config = Config(inputs, load_env_file=False).get_enricher_config()
    except ConfigurationError as e:
        logger.error(f"Input validation failed: {str(e)}")
        return _error_response(str(e), 400)

    try:
        enricher = ReleaseNotesEnricher(config)
        # Ticket fetches swallow auth errors, so check the credentials up front
        enricher.client.test_connection()
        report = enricher.run()
        logger.info(f"Successfully processed {len(report.tickets)} ticket references")

        response = {
            "status": "success",
            "environment": report.environment,
            "text": report.text,
            "tickets": [outcome.model_dump(mode="json") for outcome in report.tickets],
            "skipped": report.skipped,
        }
        return func.HttpResponse(
            body=json.dumps(response),
            mimetype="application/json",
            status_code=200
        )

    except HttpUnauthorizedError as e:
        logger.error(f"Jira authentication failed: {str(e)}")
        return _error_response(str(e), 401)
    except JiraFetchError as e:
        logger.error(f"Jira error: {str(e)}")
        return _error_response(f"Jira API error: {str(e)}", 500)
    except Exception as e:
        logger.error(f"Error processing release notes: {str(e)}", exc_info=True)  # Include stack trace
        return _error_response("Internal Server Error", 500)
