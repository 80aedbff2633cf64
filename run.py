"""
Entry point for the CI step.
Reads the action inputs, runs the release-notes enrichment and publishes the text output.
"""
from jira_notes.utils.action_io import main

if __name__ == '__main__':
    main()
