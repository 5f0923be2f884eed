"""
Core data models for Guidebook.

Defines the RawDocument dataclass (a guide file as read from a source)
and the Guide dataclass (a guide whose front matter passed linting and
which can enter the catalog).
"""

from dataclasses import dataclass, field, asdict
from datetime import date, datetime
from typing import Optional
import math


# Average adult reading speed used for reading-time estimates
WORDS_PER_MINUTE: int = 200


@dataclass
class RawDocument:
    """
    A guide file exactly as a source delivered it.

    Attributes:
        path: Display path of the file (relative path or URL).
        text: Full file contents (front matter and body).
        source_name: Which source produced it (e.g., "local", "remote").
    """
    path: str
    text: str
    source_name: str = "local"


def normalize_tags(tags: list[str]) -> list[str]:
    """
    Normalize tags: strip, lowercase, drop empties and duplicates.

    Order of first appearance is kept.
    """
    normalized: list[str] = []
    for tag in tags:
        tag = str(tag).strip().lower()
        if tag and tag not in normalized:
            normalized.append(tag)
    return normalized


@dataclass
class Guide:
    """
    Represents a single published guide.

    This is the structure that flows from linting into the catalog,
    the report and the web dashboard.

    Attributes:
        slug: Unique identifier derived from the file name.
        title: Document title.
        description: Short summary.
        type: Document kind, e.g. "Guide".
        category: Topic area, e.g. "Security".
        tags: Normalized free-form labels.
        published_at: Publication date.
        icon: Optional symbol or emoji.
        color: Optional hex color code.
        body: Markdown body (everything after the front matter).
        source_name: Which source the guide came from.
        path: Where the guide was read from.
        created_at: When this record was created in our system.
        updated_at: When this record was last updated.
    """

    # Required fields
    slug: str
    title: str
    category: str
    published_at: date

    # Optional fields with defaults
    description: str = ""
    type: str = "Guide"
    tags: list[str] = field(default_factory=list)
    icon: Optional[str] = None
    color: Optional[str] = None
    body: str = ""
    source_name: str = "local"
    path: str = ""
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self) -> None:
        """Normalize tags and validate fields after initialization."""
        if isinstance(self.tags, list):
            self.tags = normalize_tags(self.tags)
        self.validate()

    def validate(self) -> None:
        """
        Validate that required fields are present and valid.

        Raises:
            ValueError: If validation fails.
        """
        errors = []

        if not self.slug or not self.slug.strip():
            errors.append("slug is required and cannot be empty")

        if not self.title or not self.title.strip():
            errors.append("title is required and cannot be empty")

        if not self.category or not self.category.strip():
            errors.append("category is required and cannot be empty")

        if not isinstance(self.tags, list):
            errors.append(f"tags must be a list, got {type(self.tags).__name__}")

        # datetime is a date subclass; only plain dates are accepted
        if not isinstance(self.published_at, date) or isinstance(self.published_at, datetime):
            errors.append(f"published_at must be a date, got {self.published_at!r}")

        if errors:
            raise ValueError(f"Guide validation failed: {'; '.join(errors)}")

    @property
    def word_count(self) -> int:
        """Number of whitespace-separated words in the body."""
        return len(self.body.split())

    @property
    def reading_minutes(self) -> int:
        """Estimated reading time in whole minutes (at least 1)."""
        return max(1, math.ceil(self.word_count / WORDS_PER_MINUTE))

    def has_tag(self, tag: str) -> bool:
        """Case-insensitive tag membership."""
        return tag.strip().lower() in self.tags

    def to_front_matter(self) -> dict:
        """Return the front-matter fields using their document key names."""
        data = {
            "title": self.title,
            "description": self.description,
            "type": self.type,
            "category": self.category,
            "tags": list(self.tags),
            "icon": self.icon,
            "color": self.color,
            "publishedAt": self.published_at.isoformat(),
        }
        return {k: v for k, v in data.items() if v is not None}

    def to_dict(self) -> dict:
        """
        Convert Guide to a plain dictionary for storage/serialization.

        Date and datetime fields are converted to ISO format strings.
        """
        data = asdict(self)
        data["published_at"] = self.published_at.isoformat()
        data["created_at"] = self.created_at.isoformat()
        data["updated_at"] = self.updated_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Guide":
        """
        Create a Guide from a dictionary (e.g., from the catalog file).

        Accepts the front-matter key ``publishedAt`` as an alias for
        ``published_at`` and converts ISO strings back to dates.
        """
        data = data.copy()

        if "publishedAt" in data:
            data.setdefault("published_at", data.pop("publishedAt"))

        if isinstance(data.get("published_at"), str):
            data["published_at"] = date.fromisoformat(data["published_at"])

        if data.get("created_at") and isinstance(data["created_at"], str):
            data["created_at"] = datetime.fromisoformat(data["created_at"])

        if data.get("updated_at") and isinstance(data["updated_at"], str):
            data["updated_at"] = datetime.fromisoformat(data["updated_at"])

        return cls(**data)

    @classmethod
    def from_document(cls, document) -> "Guide":
        """
        Build a Guide from a ParsedDocument whose front matter passed linting.

        Args:
            document: A guidebook.parsing.ParsedDocument.

        Raises:
            ValueError: If the metadata cannot form a valid Guide.
        """
        meta = document.metadata
        published = meta.get("publishedAt")
        if isinstance(published, datetime):
            published = published.date()
        elif isinstance(published, str):
            published = date.fromisoformat(published.strip()[:10])

        return cls(
            slug=document.slug,
            title=str(meta.get("title", "")).strip(),
            description=str(meta.get("description", "")).strip(),
            type=str(meta.get("type", "Guide")).strip(),
            category=str(meta.get("category", "")).strip(),
            tags=list(meta.get("tags") or []),
            published_at=published,
            icon=meta.get("icon"),
            color=meta.get("color"),
            body=document.body,
            source_name=document.source_name,
            path=document.path,
        )

    def __str__(self) -> str:
        """Human-readable string representation."""
        return f"[{self.category}] {self.title} ({self.published_at.isoformat()})"

    def __repr__(self) -> str:
        """Detailed representation for debugging."""
        return (
            f"Guide(slug={self.slug!r}, title={self.title!r}, "
            f"category={self.category!r}, tags={self.tags!r})"
        )
