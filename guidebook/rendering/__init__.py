"""
Rendering module.

Turns guide bodies into HTML, heading outlines and plain text.
"""

from guidebook.rendering.renderer import (
    MARKDOWN_EXTENSIONS,
    OutlineEntry,
    RenderedGuide,
    render_markdown,
    extract_outline,
    extract_text,
    render_guide,
)

__all__ = [
    "MARKDOWN_EXTENSIONS",
    "OutlineEntry",
    "RenderedGuide",
    "render_markdown",
    "extract_outline",
    "extract_text",
    "render_guide",
]
