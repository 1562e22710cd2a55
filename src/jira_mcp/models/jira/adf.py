"""
Atlassian Document Format (ADF) to plain text.

Jira Cloud returns rich-text fields (description, comment bodies, worklog
comments) as ADF documents. This module walks the node tree and produces
readable plain text. Node types without a dedicated renderer fall back to
rendering their children, so new node kinds degrade gracefully.
"""

from collections.abc import Callable
from typing import Any

AdfNode = dict[str, Any]

_BLOCK_SEPARATOR = "\n"


def _render_children(node: AdfNode, separator: str = "") -> str:
    return separator.join(
        _render_node(child) for child in node.get("content") or [] if child
    )


def _render_text(node: AdfNode) -> str:
    text = node.get("text", "")
    for mark in node.get("marks") or []:
        if mark.get("type") == "link":
            href = (mark.get("attrs") or {}).get("href")
            if href and href != text:
                return f"{text} ({href})"
    return text


def _render_block(node: AdfNode) -> str:
    return _render_children(node)


def _render_doc(node: AdfNode) -> str:
    return _BLOCK_SEPARATOR.join(
        rendered
        for rendered in (_render_node(child) for child in node.get("content") or [])
        if rendered
    )


def _render_heading(node: AdfNode) -> str:
    level = (node.get("attrs") or {}).get("level", 1)
    return f"{'#' * int(level)} {_render_children(node)}"


def _render_list(node: AdfNode, ordered: bool) -> str:
    lines = []
    start = int((node.get("attrs") or {}).get("order", 1))
    for index, item in enumerate(node.get("content") or []):
        bullet = f"{start + index}." if ordered else "-"
        body = _render_children(item, _BLOCK_SEPARATOR)
        lines.append(f"{bullet} {body}")
    return _BLOCK_SEPARATOR.join(lines)


def _render_code_block(node: AdfNode) -> str:
    language = (node.get("attrs") or {}).get("language") or ""
    return f"```{language}\n{_render_children(node)}\n```"


def _render_blockquote(node: AdfNode) -> str:
    body = _render_children(node, _BLOCK_SEPARATOR)
    return _BLOCK_SEPARATOR.join(f"> {line}" for line in body.splitlines())


def _render_table(node: AdfNode) -> str:
    rows = []
    for row in node.get("content") or []:
        cells = [_render_children(cell, " ").strip() for cell in row.get("content") or []]
        rows.append(f"| {' | '.join(cells)} |")
    return _BLOCK_SEPARATOR.join(rows)


def _render_media(node: AdfNode) -> str:
    attrs = node.get("attrs") or {}
    label = attrs.get("alt") or attrs.get("id") or "attachment"
    return f"[media: {label}]"


def _render_mention(node: AdfNode) -> str:
    text = (node.get("attrs") or {}).get("text") or ""
    return text if text.startswith("@") else f"@{text}"


def _render_emoji(node: AdfNode) -> str:
    attrs = node.get("attrs") or {}
    return attrs.get("text") or attrs.get("shortName") or ""


def _render_card(node: AdfNode) -> str:
    return (node.get("attrs") or {}).get("url", "")


def _render_status(node: AdfNode) -> str:
    return f"[{(node.get('attrs') or {}).get('text', '')}]"


def _render_date(node: AdfNode) -> str:
    return str((node.get("attrs") or {}).get("timestamp", ""))


_RENDERERS: dict[str, Callable[[AdfNode], str]] = {
    "doc": _render_doc,
    "paragraph": _render_block,
    "text": _render_text,
    "hardBreak": lambda node: "\n",
    "heading": _render_heading,
    "bulletList": lambda node: _render_list(node, ordered=False),
    "orderedList": lambda node: _render_list(node, ordered=True),
    "codeBlock": _render_code_block,
    "blockquote": _render_blockquote,
    "rule": lambda node: "---",
    "table": _render_table,
    "media": _render_media,
    "mediaInline": _render_media,
    "mention": _render_mention,
    "emoji": _render_emoji,
    "inlineCard": _render_card,
    "blockCard": _render_card,
    "embedCard": _render_card,
    "status": _render_status,
    "date": _render_date,
}


def _render_node(node: Any) -> str:
    if isinstance(node, str):
        return node
    if not isinstance(node, dict):
        return ""
    renderer = _RENDERERS.get(node.get("type", ""))
    if renderer is None:
        # mediaSingle, mediaGroup, listItem, panel, expand, ... and unknown kinds
        return _render_children(node, _BLOCK_SEPARATOR if _is_block(node) else "")
    return renderer(node)


def _is_block(node: AdfNode) -> bool:
    return any(
        isinstance(child, dict) and child.get("type") in _BLOCK_TYPES
        for child in node.get("content") or []
    )


_BLOCK_TYPES = {
    "paragraph",
    "heading",
    "bulletList",
    "orderedList",
    "codeBlock",
    "blockquote",
    "table",
    "mediaSingle",
    "mediaGroup",
    "rule",
    "panel",
}


def adf_to_text(adf_content: AdfNode | list | str | None) -> str:
    """
    Convert ADF content to plain text.

    Args:
        adf_content: An ADF document or node, a list of nodes, a plain
            string (Jira Server/DC wiki text), or None

    Returns:
        The rendered text; an empty string for empty input
    """
    if adf_content is None:
        return ""
    if isinstance(adf_content, list):
        return _BLOCK_SEPARATOR.join(
            rendered for rendered in (_render_node(n) for n in adf_content) if rendered
        )
    return _render_node(adf_content)
