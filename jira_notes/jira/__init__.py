"""
Jira integration package.

This package provides the Jira client and the release-notes enrichment pipeline.
"""

from jira_notes.jira.jira_client import JiraAPIWrapper, TrackerClient
from jira_notes.jira.jira_enricher import ReleaseNotesEnricher

__all__ = ["JiraAPIWrapper", "ReleaseNotesEnricher", "TrackerClient"]
