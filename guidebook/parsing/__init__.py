"""
Parsing module.

Splits guide files into YAML front matter and Markdown body.
"""

from guidebook.parsing.frontmatter import (
    FM_BOUNDARY,
    FrontMatterError,
    ParsedDocument,
    parse_document,
    parse_text,
    slugify_path,
    split_front_matter,
)

__all__ = [
    "FM_BOUNDARY",
    "FrontMatterError",
    "ParsedDocument",
    "parse_document",
    "parse_text",
    "slugify_path",
    "split_front_matter",
]
