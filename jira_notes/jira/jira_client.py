"""
Jira API wrapper for interacting with Jira.

This module provides the tracker client protocol the enricher depends on and
a REST implementation of it for Jira Cloud.
"""

from typing import Any, Dict, List, Optional, Protocol, runtime_checkable
import logging

from pydantic import BaseModel, model_validator
from langchain_core.utils import get_from_dict_or_env
import requests
from urllib3.exceptions import InsecureRequestWarning

from jira_notes.exceptions.api_exceptions import HttpUnauthorizedError, JiraFetchError

DEFAULT_REQUEST_TIMEOUT = 30


@runtime_checkable
class TrackerClient(Protocol):
    """Capabilities the release-notes enricher needs from an issue tracker."""

    base_url: str

    def get_issue(self, issue_key: str) -> Dict[str, Any]: ...

    def get_transitions(self, issue_key: str) -> List[Dict[str, Any]]: ...

    def do_transition(self, issue_key: str, transition_id: str) -> None: ...

    def edit_issue(self, issue_key: str, fields: Dict[str, Any]) -> None: ...

    def get_version(self, version_id: str) -> Dict[str, Any]: ...

    def get_project(self, project_id: str) -> Dict[str, Any]: ...

    def get_sprint(self, sprint_id: str) -> Dict[str, Any]: ...

    def move_issues_to_sprint(self, sprint_id: str, issue_keys: List[str]) -> None: ...


class JiraAPIWrapper(BaseModel):
    """Wrapper for the Jira REST and Agile APIs."""

    jira_username: Optional[str] = None
    jira_api_token: Optional[str] = None
    jira_instance_url: Optional[str] = None
    ssl_verify: bool = True
    request_timeout: int = DEFAULT_REQUEST_TIMEOUT

    @model_validator(mode='after')
    def validate_environment(self) -> 'JiraAPIWrapper':
        """Fill missing credentials from the environment and validate them."""
        jira_username = get_from_dict_or_env(
            dict(self), "jira_username", "JIRA_EMAIL", ""
        )
        jira_api_token = get_from_dict_or_env(
            dict(self), "jira_api_token", "JIRA_API_TOKEN", ""
        )
        jira_instance_url = get_from_dict_or_env(
            dict(self), "jira_instance_url", "JIRA_BASE_URL", ""
        )

        if not jira_instance_url or not jira_username or not jira_api_token:
            raise ValueError("JIRA credentials or instance URL are missing.")

        object.__setattr__(self, "jira_username", jira_username)
        object.__setattr__(self, "jira_api_token", jira_api_token)
        object.__setattr__(self, "jira_instance_url", jira_instance_url.rstrip('/'))

        if not self.ssl_verify:
            # Suppress only the InsecureRequestWarning from urllib3
            requests.packages.urllib3.disable_warnings(InsecureRequestWarning)

        return self

    @property
    def base_url(self) -> str:
        return self.jira_instance_url

    @property
    def auth(self):
        return (self.jira_username, self.jira_api_token)

    def _request(self, method: str, path: str, what: str, **kwargs) -> requests.Response:
        """Send a request and map failures onto the wrapper's exceptions.

        Args:
            method: HTTP method
            path: Path below the instance URL, starting with '/'
            what: Short description used in log and error messages

        Returns:
            The successful response
        """
        url = f"{self.jira_instance_url}{path}"
        logging.debug(f"{method} {url} ({what})")

        try:
            response = requests.request(
                method,
                url,
                auth=self.auth,
                verify=self.ssl_verify,
                timeout=self.request_timeout,
                **kwargs
            )
        except requests.exceptions.RequestException as e:
            error_msg = f"Connection error while {what}: {str(e)}"
            logging.error(error_msg)
            raise JiraFetchError(error_msg) from e

        if response.status_code in (200, 201, 204):
            return response
        elif response.status_code == 401:
            error_msg = "Unauthorized access to Jira API. Check your credentials."
            logging.error(error_msg)
            raise HttpUnauthorizedError(error_msg)
        else:
            error_msg = f"Error {what}: {response.status_code} - {response.text}"
            logging.error(error_msg)
            raise JiraFetchError(error_msg, status_code=response.status_code)

    def get_issue(self, issue_key: str) -> Dict[str, Any]:
        """Get an issue with the fields the release notes need."""
        response = self._request(
            "GET",
            f"/rest/api/2/issue/{issue_key}",
            f"fetching issue {issue_key}",
            params={"fields": "summary,status,fixVersions,labels"},
        )
        return response.json()

    def get_transitions(self, issue_key: str) -> List[Dict[str, Any]]:
        """List the workflow transitions currently available for an issue."""
        response = self._request(
            "GET",
            f"/rest/api/2/issue/{issue_key}/transitions",
            f"listing transitions for {issue_key}",
        )
        transitions = response.json().get('transitions', [])
        logging.debug(f"Found {len(transitions)} transitions for {issue_key}")
        return transitions

    def do_transition(self, issue_key: str, transition_id: str) -> None:
        """Execute a workflow transition on an issue."""
        self._request(
            "POST",
            f"/rest/api/2/issue/{issue_key}/transitions",
            f"transitioning {issue_key}",
            json={"transition": {"id": str(transition_id)}},
        )

    def edit_issue(self, issue_key: str, fields: Dict[str, Any]) -> None:
        """Update fields (labels, fixVersions, ...) of an issue."""
        self._request(
            "PUT",
            f"/rest/api/2/issue/{issue_key}",
            f"editing issue {issue_key}",
            json={"fields": fields},
        )

    def get_version(self, version_id: str) -> Dict[str, Any]:
        """Get a project version (fix version / release) by id."""
        response = self._request(
            "GET",
            f"/rest/api/2/version/{version_id}",
            f"fetching version {version_id}",
        )
        return response.json()

    def get_project(self, project_id: str) -> Dict[str, Any]:
        """Get a project by id or key."""
        response = self._request(
            "GET",
            f"/rest/api/2/project/{project_id}",
            f"fetching project {project_id}",
        )
        return response.json()

    def get_sprint(self, sprint_id: str) -> Dict[str, Any]:
        """Get a sprint from the Agile API."""
        response = self._request(
            "GET",
            f"/rest/agile/1.0/sprint/{sprint_id}",
            f"fetching sprint {sprint_id}",
        )
        return response.json()

    def move_issues_to_sprint(self, sprint_id: str, issue_keys: List[str]) -> None:
        """Move issues into a sprint. Jira accepts at most 50 issues per call."""
        self._request(
            "POST",
            f"/rest/agile/1.0/sprint/{sprint_id}/issue",
            f"moving {len(issue_keys)} issues to sprint {sprint_id}",
            json={"issues": list(issue_keys)},
        )

    def test_connection(self) -> bool:
        """Test the connection to Jira by fetching the current user."""
        try:
            response = self._request("GET", "/rest/api/2/myself", "testing the Jira connection")
            user = response.json()
            logging.info(f"Connected to Jira as {user.get('displayName', user.get('emailAddress', 'unknown'))}")
            return True
        except HttpUnauthorizedError:
            raise
        except JiraFetchError as e:
            logging.error(f"Jira connection test failed: {str(e)}")
            return False
