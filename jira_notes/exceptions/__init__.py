"""
Exception types package.
"""

from jira_notes.exceptions.api_exceptions import (
    ConfigurationError,
    HttpUnauthorizedError,
    JiraFetchError,
    TransitionUnavailableError,
)

__all__ = [
    "ConfigurationError",
    "HttpUnauthorizedError",
    "JiraFetchError",
    "TransitionUnavailableError",
]
