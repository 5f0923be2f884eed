"""
Data sources module.

Readers for guide files: local content directory and remote URLs.
"""

from guidebook.sources.base import Source
from guidebook.sources.directory import DirectorySource
from guidebook.sources.remote import RemoteSource

__all__ = [
    "Source",
    "DirectorySource",
    "RemoteSource",
]
