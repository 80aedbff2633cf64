"""
Shared fixtures: an in-memory tracker that records every call made to it.
"""

import pytest

from jira_notes.exceptions.api_exceptions import JiraFetchError

BASE_URL = "https://example.atlassian.net"

DEFAULT_TRANSITIONS = [
    {"id": "11", "name": "Start Progress", "to": {"name": "In Progress"}},
    {"id": "21", "name": "Move to Dev", "to": {"name": "Dev"}},
    {"id": "31", "name": "Deploy to Stage", "to": {"name": "Stage"}},
    {"id": "41", "name": "Deploy to Preprod", "to": {"name": "Preprod"}},
    {"id": "51", "name": "Done", "to": {"name": "Done"}},
]


def make_issue(key, summary="Some change", status="To Do", releases=(), labels=()):
    return {
        "key": key,
        "fields": {
            "summary": summary,
            "status": {"name": status},
            "fixVersions": [{"id": str(i), "name": name} for i, name in enumerate(releases)],
            "labels": list(labels),
        },
    }


class FakeTracker:
    """Tracker client double implementing the TrackerClient protocol."""

    base_url = BASE_URL

    def __init__(self):
        self.issues = {}
        self.transitions = list(DEFAULT_TRANSITIONS)
        self.versions = {"100": {"id": "100", "name": "Release 1.2", "projectId": 10000}}
        self.projects = {"10000": {"id": "10000", "key": "AB", "name": "Alpha Beta"}}
        self.sprints = {"7": {"id": 7, "name": "Sprint 7", "state": "active"}}
        self.failing = set()
        self.failing_sprint_batches = set()
        self.calls = []

    def add_issue(self, key, **kwargs):
        self.issues[key] = make_issue(key, **kwargs)

    def calls_to(self, name):
        return [args for call, args in self.calls if call == name]

    def get_issue(self, issue_key):
        self.calls.append(("get_issue", (issue_key,)))
        if issue_key in self.failing or issue_key not in self.issues:
            raise JiraFetchError(f"Error fetching issue {issue_key}: 404", status_code=404)
        return self.issues[issue_key]

    def get_transitions(self, issue_key):
        self.calls.append(("get_transitions", (issue_key,)))
        return self.transitions

    def do_transition(self, issue_key, transition_id):
        self.calls.append(("do_transition", (issue_key, transition_id)))
        transition = next(t for t in self.transitions if t["id"] == transition_id)
        self.issues[issue_key]["fields"]["status"] = dict(transition["to"])

    def edit_issue(self, issue_key, fields):
        self.calls.append(("edit_issue", (issue_key, fields)))
        issue_fields = self.issues[issue_key]["fields"]
        if "fixVersions" in fields:
            issue_fields["fixVersions"] = [
                {"id": v["id"], "name": self.versions[v["id"]]["name"]} for v in fields["fixVersions"]
            ]
        if "labels" in fields:
            issue_fields["labels"] = list(fields["labels"])

    def get_version(self, version_id):
        self.calls.append(("get_version", (version_id,)))
        if version_id not in self.versions:
            raise JiraFetchError(f"Error fetching version {version_id}: 404", status_code=404)
        return self.versions[version_id]

    def get_project(self, project_id):
        self.calls.append(("get_project", (project_id,)))
        return self.projects[project_id]

    def get_sprint(self, sprint_id):
        self.calls.append(("get_sprint", (sprint_id,)))
        if sprint_id not in self.sprints:
            raise JiraFetchError(f"Error fetching sprint {sprint_id}: 404", status_code=404)
        return self.sprints[sprint_id]

    def move_issues_to_sprint(self, sprint_id, issue_keys):
        self.calls.append(("move_issues_to_sprint", (sprint_id, list(issue_keys))))
        if len(self.calls_to("move_issues_to_sprint")) in self.failing_sprint_batches:
            raise JiraFetchError("Error moving issues to sprint: 400", status_code=400)


@pytest.fixture
def tracker():
    return FakeTracker()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every environment variable the configuration could pick up."""
    for name in (
        "INPUT_MARKDOWN", "INPUT_JIRAEMAIL", "INPUT_JIRAAPITOKEN", "INPUT_JIRABASEURL",
        "INPUT_RELEASEENV", "INPUT_JIRASPRINTID", "INPUT_JIRARELEASEID", "INPUT_OUTPUTFORMAT",
        "JIRA_EMAIL", "JIRA_API_TOKEN", "JIRA_BASE_URL", "RELEASE_ENV", "JIRA_SPRINT_ID",
        "JIRA_RELEASE_ID", "OUTPUT_FORMAT", "SSL_VERIFY", "REQUEST_TIMEOUT", "GITHUB_OUTPUT",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
