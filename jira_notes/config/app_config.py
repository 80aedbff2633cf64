"""Configuration management for the Jira release-notes helper."""

import os
import logging
from typing import Dict, Any, Mapping, Optional
from dotenv import load_dotenv

from jira_notes.config.workflow import RELEASE_ENVIRONMENTS, NONE_SENTINEL
from jira_notes.exceptions.api_exceptions import ConfigurationError
from jira_notes.jira.jira_client import DEFAULT_REQUEST_TIMEOUT
from jira_notes.utils.markdown_utils import CONVERTERS


class Config:
    """Configuration manager for a release-notes run.

    Values are read from the ``inputs`` mapping first, then from the
    ``INPUT_<NAME>`` variables a CI runner exports for action inputs, then
    from the plain environment variables listed in ``ENV_FALLBACKS``.
    """

    DEFAULT_OUTPUT_FORMAT = "slack"

    # Required inputs for a run
    REQUIRED_INPUTS = [
        'jiraEmail',
        'jiraApiToken',
        'jiraBaseUrl',
        'releaseEnv',
    ]

    ENV_FALLBACKS = {
        'jiraEmail': 'JIRA_EMAIL',
        'jiraApiToken': 'JIRA_API_TOKEN',
        'jiraBaseUrl': 'JIRA_BASE_URL',
        'releaseEnv': 'RELEASE_ENV',
        'jiraSprintID': 'JIRA_SPRINT_ID',
        'jiraReleaseID': 'JIRA_RELEASE_ID',
        'outputFormat': 'OUTPUT_FORMAT',
    }

    def __init__(self, inputs: Optional[Mapping[str, Any]] = None, load_env_file: bool = True):
        """Initialize configuration from the given inputs and the environment."""
        self.inputs = dict(inputs or {})

        if load_env_file:
            # Project root first, then the current working directory
            root_path = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), '.env')
            cwd_path = os.path.join(os.getcwd(), '.env')
            if load_dotenv(dotenv_path=root_path):
                logging.info(f"Successfully loaded environment from {root_path}")
            elif load_dotenv(dotenv_path=cwd_path):
                logging.info(f"Successfully loaded environment from {cwd_path}")
            else:
                logging.debug("No .env file found. Using inputs and environment variables only.")

        self._validate_inputs()

    def get_input(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Look up a named input."""
        value = self.inputs.get(name)
        if value is None or value == "":
            value = os.getenv(f"INPUT_{name.replace(' ', '_').upper()}")
        if (value is None or value == "") and name in self.ENV_FALLBACKS:
            value = os.getenv(self.ENV_FALLBACKS[name])
        if value is None or value == "":
            return default
        return str(value).strip() if name != 'markdown' else str(value)

    def get_optional_id(self, name: str) -> Optional[str]:
        """Look up an id input that may carry the "None" sentinel."""
        value = self.get_input(name)
        if value is None or value == NONE_SENTINEL:
            return None
        return value

    def _validate_inputs(self) -> None:
        """Validate that all required inputs are set and well formed."""
        missing = [name for name in self.REQUIRED_INPUTS if not self.get_input(name)]
        if missing:
            msg = f"Missing required inputs: {', '.join(missing)}"
            logging.error(msg)
            raise ConfigurationError(msg)

        release_env = self.get_input('releaseEnv')
        if release_env not in RELEASE_ENVIRONMENTS:
            msg = f"releaseEnv must be one of: {', '.join(RELEASE_ENVIRONMENTS)} (got '{release_env}')"
            logging.error(msg)
            raise ConfigurationError(msg)

        output_format = self.get_input('outputFormat', self.DEFAULT_OUTPUT_FORMAT)
        if output_format not in CONVERTERS:
            msg = f"outputFormat must be one of: {', '.join(CONVERTERS)} (got '{output_format}')"
            logging.error(msg)
            raise ConfigurationError(msg)

        timeout = os.getenv("REQUEST_TIMEOUT", str(DEFAULT_REQUEST_TIMEOUT))
        if not timeout.isdigit() or int(timeout) <= 0:
            msg = f"REQUEST_TIMEOUT must be a positive integer (got '{timeout}')"
            logging.error(msg)
            raise ConfigurationError(msg)

    def is_production(self) -> bool:
        """Check if the application is running in production mode."""
        return os.getenv("ENVIRONMENT", "development").lower() == "production"

    def get_enricher_config(self) -> Dict[str, Any]:
        """
        Get configuration for the ReleaseNotesEnricher.

        Returns:
            Dictionary with configuration values
        """
        return {
            "markdown": self.get_input('markdown', ""),
            "release_env": self.get_input('releaseEnv'),
            "sprint_id": self.get_optional_id('jiraSprintID'),
            "release_id": self.get_optional_id('jiraReleaseID'),
            "output_format": self.get_input('outputFormat', self.DEFAULT_OUTPUT_FORMAT),

            # Jira configuration
            "jira_username": self.get_input('jiraEmail'),
            "jira_api_key": self.get_input('jiraApiToken'),
            "jira_url": self.get_input('jiraBaseUrl'),
            "ssl_verify": os.getenv("SSL_VERIFY", "True").lower() == "true",
            "request_timeout": int(os.getenv("REQUEST_TIMEOUT", str(DEFAULT_REQUEST_TIMEOUT))),
        }
