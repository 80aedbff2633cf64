"""
Tests for the Jira REST wrapper with requests patched out.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from jira_notes.exceptions.api_exceptions import HttpUnauthorizedError, JiraFetchError
from jira_notes.jira.jira_client import JiraAPIWrapper, TrackerClient


def response(status_code=200, payload=None, text=""):
    mock = MagicMock()
    mock.status_code = status_code
    mock.json.return_value = payload if payload is not None else {}
    mock.text = text
    return mock


@pytest.fixture
def wrapper(clean_env):
    return JiraAPIWrapper(
        jira_username="ci@example.com",
        jira_api_token="token",
        jira_instance_url="https://example.atlassian.net/",
        request_timeout=5,
    )


def test_wrapper_implements_tracker_protocol(wrapper):
    assert isinstance(wrapper, TrackerClient)
    assert wrapper.base_url == "https://example.atlassian.net"


def test_credentials_fall_back_to_environment(clean_env):
    clean_env.setenv("JIRA_EMAIL", "env@example.com")
    clean_env.setenv("JIRA_API_TOKEN", "env-token")
    clean_env.setenv("JIRA_BASE_URL", "https://env.atlassian.net")

    wrapper = JiraAPIWrapper()

    assert wrapper.jira_username == "env@example.com"
    assert wrapper.jira_api_token == "env-token"
    assert wrapper.base_url == "https://env.atlassian.net"


def test_missing_credentials_are_rejected(clean_env):
    with pytest.raises(ValueError):
        JiraAPIWrapper(jira_username="ci@example.com")


def test_get_issue(wrapper):
    payload = {"key": "AB-12", "fields": {"summary": "Add login"}}
    with patch("jira_notes.jira.jira_client.requests.request", return_value=response(payload=payload)) as request:
        assert wrapper.get_issue("AB-12") == payload

    args, kwargs = request.call_args
    assert args == ("GET", "https://example.atlassian.net/rest/api/2/issue/AB-12")
    assert kwargs["auth"] == ("ci@example.com", "token")
    assert kwargs["timeout"] == 5
    assert kwargs["params"] == {"fields": "summary,status,fixVersions,labels"}


def test_transitions_round_trip(wrapper):
    listing = {"transitions": [{"id": "31", "name": "Deploy to Stage"}]}
    with patch("jira_notes.jira.jira_client.requests.request",
               side_effect=[response(payload=listing), response(status_code=204)]) as request:
        transitions = wrapper.get_transitions("AB-12")
        wrapper.do_transition("AB-12", transitions[0]["id"])

    post = request.call_args_list[1]
    assert post.args == ("POST", "https://example.atlassian.net/rest/api/2/issue/AB-12/transitions")
    assert post.kwargs["json"] == {"transition": {"id": "31"}}


def test_edit_issue_and_sprint_move(wrapper):
    with patch("jira_notes.jira.jira_client.requests.request", return_value=response(status_code=204)) as request:
        wrapper.edit_issue("AB-12", {"labels": ["x"]})
        wrapper.move_issues_to_sprint("7", ["AB-12", "CD-3"])

    edit, move = request.call_args_list
    assert edit.args == ("PUT", "https://example.atlassian.net/rest/api/2/issue/AB-12")
    assert edit.kwargs["json"] == {"fields": {"labels": ["x"]}}
    assert move.args == ("POST", "https://example.atlassian.net/rest/agile/1.0/sprint/7/issue")
    assert move.kwargs["json"] == {"issues": ["AB-12", "CD-3"]}


def test_version_project_and_sprint_lookups(wrapper):
    payloads = [{"id": "100", "name": "1.2"}, {"id": "10000", "name": "Alpha"}, {"id": 7, "name": "Sprint 7"}]
    with patch("jira_notes.jira.jira_client.requests.request",
               side_effect=[response(payload=p) for p in payloads]) as request:
        assert wrapper.get_version("100")["name"] == "1.2"
        assert wrapper.get_project("10000")["name"] == "Alpha"
        assert wrapper.get_sprint("7")["name"] == "Sprint 7"

    urls = [call.args[1] for call in request.call_args_list]
    assert urls == [
        "https://example.atlassian.net/rest/api/2/version/100",
        "https://example.atlassian.net/rest/api/2/project/10000",
        "https://example.atlassian.net/rest/agile/1.0/sprint/7",
    ]


def test_unauthorized_raises(wrapper):
    with patch("jira_notes.jira.jira_client.requests.request", return_value=response(status_code=401)):
        with pytest.raises(HttpUnauthorizedError):
            wrapper.get_issue("AB-12")


def test_not_found_raises_fetch_error(wrapper):
    with patch("jira_notes.jira.jira_client.requests.request",
               return_value=response(status_code=404, text="Issue does not exist")):
        with pytest.raises(JiraFetchError) as excinfo:
            wrapper.get_issue("XY-9")

    assert excinfo.value.status_code == 404
    assert "Issue does not exist" in str(excinfo.value)


def test_connection_error_raises_fetch_error(wrapper):
    with patch("jira_notes.jira.jira_client.requests.request",
               side_effect=requests.exceptions.ConnectionError("boom")):
        with pytest.raises(JiraFetchError):
            wrapper.get_sprint("7")


def test_test_connection(wrapper):
    with patch("jira_notes.jira.jira_client.requests.request",
               return_value=response(payload={"displayName": "CI Bot"})):
        assert wrapper.test_connection() is True

    with patch("jira_notes.jira.jira_client.requests.request", return_value=response(status_code=500)):
        assert wrapper.test_connection() is False
