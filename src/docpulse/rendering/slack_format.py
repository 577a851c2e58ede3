"""Slack mrkdwn and Block Kit builders for replies.

Turns Markdown answers and external titles into safe mrkdwn, caps field
values, splits long texts and renders Display objects as Block Kit blocks.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List

from docpulse.schemas.notifications import Display

FIELD_LIMIT = 1024
MESSAGE_CHUNK = 1900
HEADER_LIMIT = 150
MAX_BLOCKS = 50
# header + description + footer
FIELDS_PER_DISPLAY = MAX_BLOCKS - 3
ELLIPSIS = "..."

_CODE_RE = re.compile(r"(```[\s\S]*?```)")
_BOLD_RE = re.compile(r"\*\*(.+?)\*\*")
_LINK_RE = re.compile(r"\[([^\]\n]+)\]\((https?://[^\s)]+)\)")


def escape_mrkdwn(text: str) -> str:
    """Escape the three characters Slack treats as control sequences."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def to_mrkdwn(text: str) -> str:
    """
    Render Markdown-ish text (AI answers, descriptions) as Slack mrkdwn.
    Outside code blocks: escapes &, <, >, turns **bold** into *bold* and
    [label](url) into <url|label>. Code blocks are only escaped.
    """
    out: List[str] = []
    for part in _CODE_RE.split(text):
        part = escape_mrkdwn(part)
        if not (part.startswith("```") and part.endswith("```")):
            part = _BOLD_RE.sub(r"*\1*", part)
            part = _LINK_RE.sub(lambda m: f"<{m.group(2)}|{m.group(1)}>", part)
        out.append(part)
    return "".join(out)


def link(url: str, label: str) -> str:
    return f"<{escape_mrkdwn(url)}|{escape_mrkdwn(label)}>"


def truncate_field(text: str, limit: int = FIELD_LIMIT) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - len(ELLIPSIS)] + ELLIPSIS


def split_message(text: str, size: int = MESSAGE_CHUNK) -> List[str]:
    """
    Consecutive slices of at most `size` characters, in order.
    """
    if len(text) <= size:
        return [text]
    return [text[i : i + size] for i in range(0, len(text), size)]


def build_display_blocks(display: Display) -> List[Dict[str, Any]]:
    """
    Header, optional description, one section per field, optional context footer.
    Raises ValueError past Slack's per-message block limit; callers page fields
    in groups of FIELDS_PER_DISPLAY.
    """
    blocks: List[Dict[str, Any]] = [
        {
            "type": "header",
            "text": {"type": "plain_text", "text": truncate_field(display.title, HEADER_LIMIT)},
        }
    ]
    if display.description:
        blocks.append(
            {
                "type": "section",
                "text": {"type": "mrkdwn", "text": to_mrkdwn(display.description)},
            }
        )
    for field in display.fields:
        value = field.value if field.markup else to_mrkdwn(field.value)
        blocks.append(
            {
                "type": "section",
                "text": {
                    "type": "mrkdwn",
                    "text": f"*{escape_mrkdwn(field.name)}*\n{value}",
                },
            }
        )
    if display.footer:
        blocks.append(
            {
                "type": "context",
                "elements": [{"type": "mrkdwn", "text": escape_mrkdwn(display.footer)}],
            }
        )
    if len(blocks) > MAX_BLOCKS:
        raise ValueError(f"{len(blocks)} blocks exceed the limit of {MAX_BLOCKS}")
    return blocks


def display_fallback_text(display: Display) -> str:
    """Plain notification text shown where blocks are not rendered."""
    return display.title
