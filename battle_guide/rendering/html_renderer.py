# ABOUTME: Renders structured guidance content nodes to HTML fragments for the web guide.
# ABOUTME: Every text value is escaped; inline **bold** / *italic* markup is only honoured in FormattedText.

import re
from html import escape

from battle_guide.models.guidance import (
    BulletList,
    ContentNode,
    Divider,
    FormattedText,
    Header,
    InfoBox,
    KeyValue,
    MissionBlock,
    NumberedList,
    Paragraph,
    Section,
    Spacer,
    Table,
)

_BOLD_PATTERN = re.compile(r"\*\*(.+?)\*\*")
_ITALIC_PATTERN = re.compile(r"\*(.+?)\*")

# Header level 1 maps to h3 so guidance never competes with the page's own headings
_HEADER_TAGS = {1: "h3", 2: "h4", 3: "h5"}


def _text(value: str) -> str:
    return escape(value, quote=False)


def _attr(value: str) -> str:
    return escape(value, quote=True)


def format_inline(text: str) -> str:
    """Escape text, then turn **bold** and *italic* markers into tags"""
    safe = _text(text)
    safe = _BOLD_PATTERN.sub(r"<strong>\1</strong>", safe)
    safe = _ITALIC_PATTERN.sub(r"<em>\1</em>", safe)
    safe = safe.replace("\n\n", "</p><p>").replace("\n", "<br>")
    return f"<p>{safe}</p>"


def _list_items(items: list[str]) -> str:
    return "".join(f"<li>{_text(item)}</li>" for item in items)


def render_node(node: ContentNode) -> str:
    """Render a single content node (and its children) to HTML"""
    if isinstance(node, Header):
        tag = _HEADER_TAGS.get(node.level, "h5")
        return f"<{tag} class='guidance-header-{node.level}'>{_text(node.text)}</{tag}>"

    if isinstance(node, Paragraph):
        return f"<p>{_text(node.text)}</p>"

    if isinstance(node, FormattedText):
        return f"<div class='formatted-text'>{format_inline(node.text)}</div>"

    if isinstance(node, BulletList):
        return f"<ul>{_list_items(node.items)}</ul>"

    if isinstance(node, NumberedList):
        return f"<ol>{_list_items(node.items)}</ol>"

    if isinstance(node, KeyValue):
        rows = "".join(
            "<div class='key-value-item'>"
            f"<span class='key-value-key'>{_text(key)}</span>"
            f"<span class='key-value-value'>{_text(value)}</span>"
            "</div>"
            for key, value in node.pairs
        )
        return f"<div class='key-value-list'>{rows}</div>"

    if isinstance(node, InfoBox):
        title = f"<div class='info-box-title'>{_text(node.title)}</div>" if node.title else ""
        return (
            f"<div class='info-box {_attr(node.variant.value)}'>"
            f"{title}"
            f"<div class='info-box-content'>{render_html(node.children)}</div>"
            "</div>"
        )

    if isinstance(node, Table):
        head = "".join(f"<th>{_text(header)}</th>" for header in node.headers)
        body = "".join(
            "<tr>" + "".join(f"<td>{_text(cell)}</td>" for cell in row) + "</tr>"
            for row in node.rows
        )
        return (
            "<table class='guidance-table'>"
            f"<thead><tr>{head}</tr></thead>"
            f"<tbody>{body}</tbody>"
            "</table>"
        )

    if isinstance(node, MissionBlock):
        player = f"<div class='mission-player'>{_text(node.player)}</div>" if node.player else ""
        return (
            "<div class='mission-block'>"
            f"<div class='mission-block-header'>{_text(node.mission_name)}</div>"
            f"{player}"
            f"<div class='mission-block-content'>{render_html(node.scoring_rules)}</div>"
            "</div>"
        )

    if isinstance(node, Divider):
        return "<hr class='guidance-divider'>"

    if isinstance(node, Spacer):
        return "<div class='guidance-spacer'></div>"

    if isinstance(node, Section):
        title = f"<h4 class='guidance-section-title'>{_text(node.title)}</h4>" if node.title else ""
        return f"<div class='guidance-section'>{title}{render_html(node.children)}</div>"

    raise TypeError(f"Unsupported content node: {type(node).__name__}")


def render_html(nodes: list[ContentNode]) -> str:
    """Render a list of content nodes to a single HTML fragment"""
    return "".join(render_node(node) for node in nodes)
