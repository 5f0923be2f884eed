"""
Data models module.

Defines data structures for raw documents and catalogued guides.
"""

from guidebook.models.guide import Guide, RawDocument, normalize_tags

__all__ = [
    "Guide",
    "RawDocument",
    "normalize_tags",
]
