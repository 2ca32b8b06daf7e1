"""Presentation of structured guidance"""

from .html_renderer import format_inline, render_html, render_node

__all__ = [
    "render_html",
    "render_node",
    "format_inline",
]
