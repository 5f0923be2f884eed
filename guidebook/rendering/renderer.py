"""
Markdown rendering for guide bodies.

Converts Markdown to HTML with the markdown library and pulls a heading
outline and plain text back out of the HTML with BeautifulSoup. The
dashboard uses the HTML and outline; catalog search uses the plain text.
"""

from dataclasses import dataclass, field
from typing import List

import markdown
from bs4 import BeautifulSoup

from guidebook.models.guide import Guide


# Extensions applied to every render
MARKDOWN_EXTENSIONS: List[str] = [
    "fenced_code",
    "tables",
    "toc",
    "sane_lists",
]


@dataclass
class OutlineEntry:
    """A heading in a rendered guide."""
    level: int
    text: str
    anchor: str = ""


@dataclass
class RenderedGuide:
    """
    A guide body rendered for display.

    Attributes:
        html: Body as HTML.
        outline: Headings in document order.
        text: Plain text (for search and word counts).
    """
    html: str
    outline: List[OutlineEntry] = field(default_factory=list)
    text: str = ""


def render_markdown(text: str) -> str:
    """
    Render Markdown to HTML.

    Args:
        text: Markdown source.

    Returns:
        HTML string. Headings carry id attributes from the toc extension.
    """
    return markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS, output_format="html")


def extract_outline(html: str) -> List[OutlineEntry]:
    """
    Collect h1-h6 headings from rendered HTML.

    Args:
        html: HTML produced by render_markdown.

    Returns:
        List of OutlineEntry in document order.
    """
    soup = BeautifulSoup(html, "html.parser")
    outline = []
    for heading in soup.find_all(["h1", "h2", "h3", "h4", "h5", "h6"]):
        outline.append(OutlineEntry(
            level=int(heading.name[1]),
            text=heading.get_text(strip=True),
            anchor=heading.get("id", ""),
        ))
    return outline


def extract_text(html: str) -> str:
    """Strip tags from rendered HTML, collapsing whitespace."""
    soup = BeautifulSoup(html, "html.parser")
    return " ".join(soup.get_text(separator=" ").split())


def render_guide(guide: Guide) -> RenderedGuide:
    """Render a guide body with its outline and plain text."""
    html = render_markdown(guide.body)
    return RenderedGuide(
        html=html,
        outline=extract_outline(html),
        text=extract_text(html),
    )
