"""
Fixed lookup tables for the release workflow.

These tables are built once at import time and are read-only.
"""

from types import MappingProxyType

# Ordered Jira workflow. A ticket may only move to a later position.
STATUS_ORDER = ("To Do", "In Progress", "Dev", "Stage", "Preprod", "Done")

# Release environment -> workflow status the tickets should reach
ENVIRONMENT_STATUS = MappingProxyType({
    "stage": "Stage",
    "preprod": "Preprod",
    "production": "Done",
})

RELEASE_ENVIRONMENTS = tuple(ENVIRONMENT_STATUS)

# Category headings and their glyphs, applied in this order
CATEGORY_GLYPHS = MappingProxyType({
    "Features": "✨",
    "Bug Fixes": "🐛",
    "Performance Improvements": "⚡",
    "Reverts": "⏪",
    "Documentation": "📚",
    "Styles": "💄",
    "Code Refactoring": "♻️",
    "Tests": "✅",
    "Build System": "📦",
    "Continuous Integration": "🤖",
    "Miscellaneous Chores": "🧹",
})

# Jira Agile rejects sprint moves of more than 50 issues per request
SPRINT_BATCH_SIZE = 50

# Value the CI platform passes for an unset sprint or release
NONE_SENTINEL = "None"

LINK_ARROW = "➡️"


def status_ordinal(status: str) -> int:
    """Position of ``status`` in the workflow, or -1 when it is not part of it."""
    try:
        return STATUS_ORDER.index(status)
    except ValueError:
        return -1
