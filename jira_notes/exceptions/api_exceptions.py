"""Exceptions raised by the Jira release-notes helper."""


class ConfigurationError(Exception):
    """Raised when required configuration is missing or malformed."""


class HttpUnauthorizedError(Exception):
    """Raised when Jira rejects the supplied credentials (HTTP 401)."""

    def __init__(self, message: str = "Unauthorized access to Jira API. Check your credentials."):
        super().__init__(message)


class JiraFetchError(Exception):
    """Raised when a Jira request fails for any reason other than authentication."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class TransitionUnavailableError(JiraFetchError):
    """Raised when an issue offers no transition leading to the requested status."""
