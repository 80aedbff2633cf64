"""
Blueprint for health check function.
"""

import logging
import os
import time
import json

import azure.functions as func

from jira_notes.exceptions.api_exceptions import HttpUnauthorizedError
from jira_notes.jira.jira_client import JiraAPIWrapper

# Create blueprint
healthcheck_bp = func.Blueprint()


@healthcheck_bp.route(route="health", methods=["GET"])
async def health_check(req: func.HttpRequest) -> func.HttpResponse:
    """Health check endpoint for monitoring."""
    logger = logging.getLogger('azure.functions')

    health = {
        "status": "healthy",
        "timestamp": time.time(),
        "dependencies": {
            "jira_api": "unknown"
        },
        "diagnostics": {
            "jira_api": {}
        }
    }

    # Check Jira connectivity
    try:
        logger.info("Health check: Testing JIRA API connection")

        health["diagnostics"]["jira_api"] = {
            "url": os.getenv("JIRA_BASE_URL", "Not configured"),
            "username": os.getenv("JIRA_EMAIL", "Not configured"),
            "request_time": time.time()
        }

        # Credentials come from JIRA_EMAIL, JIRA_API_TOKEN and JIRA_BASE_URL
        jira = JiraAPIWrapper(ssl_verify=os.getenv("SSL_VERIFY", "True").lower() == "true")

        connection_result = jira.test_connection()
        health["dependencies"]["jira_api"] = "healthy" if connection_result else "unhealthy"

        if not connection_result:
            health["status"] = "degraded"
            health["diagnostics"]["jira_api"]["error"] = "Jira API did not answer the connection test"
            logger.warning("Health check: Jira API did not answer the connection test")

    except HttpUnauthorizedError as e:
        health["dependencies"]["jira_api"] = "unauthorized"
        health["status"] = "degraded"
        health["diagnostics"]["jira_api"]["error"] = str(e)
        logger.error(f"Health check for Jira failed: {str(e)}")
    except Exception as e:
        health["dependencies"]["jira_api"] = "unhealthy"
        health["status"] = "degraded"
        health["diagnostics"]["jira_api"]["error"] = str(e)
        health["diagnostics"]["jira_api"]["error_type"] = type(e).__name__
        logger.error(f"Health check for Jira failed: {str(e)}", exc_info=True)

    health["diagnostics"]["jira_api"]["response_time"] = time.time()

    return func.HttpResponse(
        body=json.dumps(health),
        mimetype="application/json",
        status_code=200
    )
