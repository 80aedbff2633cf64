"""
Jira Release Notes Enrichment

This package enriches release-note markdown with Jira ticket metadata, moves
the referenced tickets along the release workflow and converts the notes for
chat.
"""

# Version of the jira-notes package
__version__ = "1.0.0"
