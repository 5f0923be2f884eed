"""
Front-matter parsing for guide files.

A guide file starts with a YAML front-matter block delimited by ``---``
lines and continues with a Markdown body:

```markdown
---
title: Docker Container Security
category: Security
tags:
  - docker
publishedAt: 2024-03-12
---

# Docker Container Security
...
```

The YAML itself is loaded with python-frontmatter. Delimiters are located
here as well so that lint issues can point at real file line numbers.
"""

import re
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Any
from urllib.parse import urlparse

import frontmatter
import yaml

from guidebook.models.guide import RawDocument


# Same boundary rule python-frontmatter applies for YAML: three or more dashes
FM_BOUNDARY = re.compile(r"^-{3,}\s*$")

_SLUG_INVALID = re.compile(r"[^a-z0-9]+")

_YAML_HANDLER = frontmatter.YAMLHandler()

# Top-level "key:" line inside the front-matter block
_TOP_LEVEL_KEY = re.compile(r"^([A-Za-z_][\w-]*)\s*:")


class FrontMatterError(ValueError):
    """Raised when a document's front-matter block cannot be parsed."""

    def __init__(self, message: str, path: str | None = None, line: int | None = None) -> None:
        self.message = message
        self.path = path
        self.line = line
        super().__init__(f"{message}" + (f" in {path}" if path else ""))


@dataclass
class ParsedDocument:
    """
    A guide file split into metadata and body.

    Attributes:
        path: Display path of the file.
        source_name: Source that delivered the file.
        metadata: Front-matter mapping, keys exactly as written.
        body: Markdown body, unmodified.
        body_start_line: 1-based file line number of the first body line.
        field_lines: Top-level front-matter key -> 1-based file line number.
    """
    path: str
    source_name: str
    metadata: dict[str, Any] = field(default_factory=dict)
    body: str = ""
    body_start_line: int = 1
    field_lines: dict[str, int] = field(default_factory=dict)

    @property
    def slug(self) -> str:
        return slugify_path(self.path)


def slugify_path(path: str) -> str:
    """
    Derive a slug from a file path or URL.

    >>> slugify_path("content/Docker_Security.md")
    'docker-security'
    """
    if "://" in path:
        path = urlparse(path).path
    stem = PurePosixPath(path.replace("\\", "/")).stem
    return _SLUG_INVALID.sub("-", stem.lower()).strip("-")


def split_front_matter(text: str, path: str | None = None) -> tuple[str, str, int]:
    """
    Locate the front-matter block.

    Returns:
        Tuple of (front_matter_text, body, body_start_line).

    Raises:
        FrontMatterError: If the block is missing or never closed.
    """
    text = text.lstrip("\ufeff")
    lines = text.splitlines(keepends=True)

    if not lines or not FM_BOUNDARY.match(lines[0]):
        raise FrontMatterError("missing front matter (file must start with '---')", path, 1)

    for index in range(1, len(lines)):
        if FM_BOUNDARY.match(lines[index]):
            fm_text = "".join(lines[1:index])
            body = "".join(lines[index + 1:])
            return fm_text, body, index + 2

    raise FrontMatterError("unterminated front matter (no closing '---')", path, 1)


def parse_document(raw: RawDocument) -> ParsedDocument:
    """
    Parse a RawDocument into a ParsedDocument.

    Args:
        raw: The document as read from a source.

    Returns:
        ParsedDocument with metadata and body.

    Raises:
        FrontMatterError: If the front matter is missing, unterminated,
            not valid YAML, or not a non-empty mapping.
    """
    fm_text, body, body_start_line = split_front_matter(raw.text, raw.path)

    try:
        loaded = _YAML_HANDLER.load(fm_text) if fm_text.strip() else None
    except (yaml.YAMLError, ValueError) as e:
        # SafeLoader raises ValueError for impossible dates such as 2024-02-30
        line = None
        mark = getattr(e, "problem_mark", None)
        if mark is not None:
            # +2: the opening delimiter is line 1 and marks are 0-based
            line = mark.line + 2
        problem = getattr(e, "problem", None) or str(e)
        raise FrontMatterError(f"invalid YAML in front matter: {problem}", raw.path, line) from e

    if not isinstance(loaded, dict) or not loaded:
        raise FrontMatterError("front matter must be a non-empty mapping", raw.path, 1)

    return ParsedDocument(
        path=raw.path,
        source_name=raw.source_name,
        metadata=loaded,
        body=body,
        body_start_line=body_start_line,
        field_lines=_locate_fields(fm_text),
    )


def parse_text(text: str, path: str = "<string>", source_name: str = "inline") -> ParsedDocument:
    """Parse a document given as a string."""
    return parse_document(RawDocument(path=path, text=text, source_name=source_name))


def _locate_fields(fm_text: str) -> dict[str, int]:
    """Map each top-level key to the file line it is defined on."""
    lines: dict[str, int] = {}
    for index, line in enumerate(fm_text.splitlines()):
        match = _TOP_LEVEL_KEY.match(line)
        if match:
            # +2: the opening delimiter occupies file line 1
            lines.setdefault(match.group(1), index + 2)
    return lines
