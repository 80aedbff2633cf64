"""
Helper functions for rewriting release-note markdown and converting it for chat.
"""

import re
import html
import logging
from typing import Iterable, Mapping, Optional

import markdown
from bs4 import BeautifulSoup, NavigableString, Tag

from jira_notes.config.workflow import CATEGORY_GLYPHS, LINK_ARROW
from jira_notes.models.jira_models import ReleaseInfo, SprintInfo, TicketInfo

MARKDOWN_EXTENSIONS = ["fenced_code", "sane_lists"]


def rich_link(ticket: TicketInfo) -> str:
    """Markdown block that replaces a raw ticket reference."""
    summary = html.escape(ticket.summary, quote=False)
    return f"{LINK_ARROW} [{ticket.id}]({ticket.link}) {summary}".rstrip()


def annotate_note(text: str, ticket: TicketInfo) -> str:
    """
    Replace the first reference to the ticket with a rich link and drop the rest.

    References that are already the text of a markdown link are left alone,
    so annotating the same ticket twice changes nothing.

    Args:
        text: Release-note markdown
        ticket: Populated ticket info

    Returns:
        The updated markdown, unchanged if the ticket is not referenced
    """
    reference = re.compile(re.escape(f"[{ticket.id}]") + r"(?!\()")
    first = reference.search(text)
    if first is None:
        return text

    head = text[:first.start()]
    tail = reference.sub("", text[first.end():])
    return f"{head}{rich_link(ticket)}{tail}"


def beautify_note(text: str, glyphs: Mapping[str, str] = CATEGORY_GLYPHS) -> str:
    """
    Prefix every category heading with its glyph.

    This is plain substring replacement in mapping order: a heading name that
    is contained in another one will also match inside it.
    """
    for heading, glyph in glyphs.items():
        text = text.replace(heading, f"{glyph} {heading}")
    return text


def summary_lines(
    environment: Optional[str] = None,
    release: Optional[ReleaseInfo] = None,
    sprint: Optional[SprintInfo] = None,
) -> list:
    lines = []
    if environment:
        lines.append(f"**Environment:** {environment}")
    if release:
        if release.project_name:
            lines.append(f"**Release:** {release.name} ({release.project_name})")
        else:
            lines.append(f"**Release:** {release.name}")
    if sprint:
        lines.append(f"**Sprint:** {sprint.name}")
    return lines


def prepend_lines(text: str, lines: Iterable[str]) -> str:
    """Prepend lines to the note, separated from it by a blank line."""
    lines = list(lines)
    if not lines:
        return text
    # Two trailing spaces keep consecutive lines apart once rendered
    header = "  \n".join(lines)
    return f"{header}\n\n{text}"


def _slack_escape(s: str) -> str:
    return s.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _render_inline(node) -> str:
    """Render inline HTML content as Slack mrkdwn."""
    if isinstance(node, NavigableString):
        return _slack_escape(str(node))
    if not isinstance(node, Tag):
        return ""

    inner = "".join(_render_inline(child) for child in node.children)
    name = node.name
    if name in ("strong", "b"):
        return f"*{inner.strip()}*" if inner.strip() else ""
    if name in ("em", "i"):
        return f"_{inner.strip()}_" if inner.strip() else ""
    if name in ("del", "s", "strike"):
        return f"~{inner.strip()}~" if inner.strip() else ""
    if name == "code":
        return f"`{node.get_text()}`"
    if name == "a":
        href = node.get("href", "")
        label = inner.strip()
        if not href:
            return label
        if not label or label == href:
            return f"<{href}>"
        return f"<{href}|{label}>"
    if name == "br":
        return "\n"
    if name == "img":
        return node.get("alt", "")
    return inner


def _render_list(node: Tag, depth: int) -> str:
    lines = []
    ordered = node.name == "ol"
    index = int(node.get("start", 1)) if ordered else 0
    indent = "    " * depth
    for item in node.find_all("li", recursive=False):
        nested = []
        parts = []
        for child in item.children:
            if isinstance(child, Tag) and child.name in ("ul", "ol"):
                nested.append(_render_list(child, depth + 1))
            elif isinstance(child, Tag) and child.name == "p":
                parts.append(_render_inline(child).strip())
            else:
                parts.append(_render_inline(child))
        marker = f"{index}." if ordered else "•"
        lines.append(f"{indent}{marker} {' '.join(p.strip() for p in parts if p.strip())}")
        lines.extend(nested)
        index += 1
    return "\n".join(lines)


def _render_block(node) -> str:
    if isinstance(node, NavigableString):
        return _slack_escape(str(node)).strip()
    if not isinstance(node, Tag):
        return ""

    name = node.name
    if re.fullmatch(r"h[1-6]", name):
        title = "".join(_render_inline(child) for child in node.children).strip()
        return f"*{title}*"
    if name in ("ul", "ol"):
        return _render_list(node, 0)
    if name == "pre":
        return f"```\n{node.get_text().rstrip()}\n```"
    if name == "blockquote":
        body = "\n\n".join(b for b in (_render_block(c) for c in node.children) if b)
        return "\n".join(f"> {line}" if line else ">" for line in body.split("\n"))
    if name == "hr":
        return "───"
    return "".join(_render_inline(child) for child in node.children).strip()


def to_slack_markdown(text: str) -> str:
    """
    Convert markdown into Slack mrkdwn.

    Headings become bold lines, links become <url|label> and list items
    get bullet glyphs.
    """
    if not text:
        return ""
    rendered = markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS)
    soup = BeautifulSoup(rendered, "html.parser")
    blocks = [_render_block(node) for node in soup.children]
    return "\n\n".join(block for block in blocks if block)


def to_plain_text(text: str) -> str:
    """Strip all markdown formatting, keeping the readable text."""
    if not text:
        return ""
    rendered = markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS)
    soup = BeautifulSoup(rendered, "html.parser")
    blocks = [
        str(node).strip() if isinstance(node, NavigableString) else node.get_text().strip()
        for node in soup.children
    ]
    plain = "\n\n".join(block for block in blocks if block)
    # Block elements nested in lists leave runs of blank lines behind
    plain = re.sub(r'\n\s*\n+', '\n\n', plain)
    logging.debug(f"Converted {len(text)} chars of markdown to {len(plain)} chars of text")
    return plain


CONVERTERS = {
    "slack": to_slack_markdown,
    "plain": to_plain_text,
}
