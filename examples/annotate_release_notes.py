# Example script showing how to run the enricher on a local release-notes file
import sys
import logging

from jira_notes.config.app_config import Config
from jira_notes.jira.jira_enricher import ReleaseNotesEnricher

# Configure basic logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


def main():
    """
    Annotate a markdown file with Jira data and print the chat text.

    Jira credentials are read from JIRA_EMAIL, JIRA_API_TOKEN and JIRA_BASE_URL.

    Usage: python annotate_release_notes.py <markdown_file> <stage|preprod|production> [plain|slack]
    Example: python annotate_release_notes.py CHANGELOG.md stage
    """
    if len(sys.argv) not in (3, 4):
        print("Usage: python annotate_release_notes.py <markdown_file> <stage|preprod|production> [plain|slack]")
        sys.exit(1)

    with open(sys.argv[1], encoding='utf-8') as f:
        markdown = f.read()

    inputs = {"markdown": markdown, "releaseEnv": sys.argv[2]}
    if len(sys.argv) == 4:
        inputs["outputFormat"] = sys.argv[3]

    config = Config(inputs).get_enricher_config()
    report = ReleaseNotesEnricher(config).run()

    logging.info(f"Skipped tickets: {', '.join(report.skipped) or 'none'}")
    print(report.text)


if __name__ == "__main__":
    main()
