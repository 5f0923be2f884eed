"""
Base catalog abstraction for Guidebook.

Defines the abstract interface that all catalog backends must implement,
plus the listing, filtering and search helpers they share. This allows
swapping between an in-memory catalog, a JSON file, or another store.
"""

from abc import ABC, abstractmethod
from collections import Counter
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional

from guidebook.models.guide import Guide
from guidebook.rendering import render_guide


class CatalogError(ValueError):
    """Raised when a catalog backend cannot load or save its data."""


@dataclass
class UpsertResult:
    """
    Result of an upsert operation.

    Attributes:
        inserted: Number of new guides added.
        updated: Number of existing guides replaced.
        failed: Number of guides that failed to save.
        removed: Number of stale guides dropped from the catalog.
        errors: List of error messages for failed guides.
    """
    inserted: int = 0
    updated: int = 0
    failed: int = 0
    removed: int = 0
    errors: List[str] = None

    def __post_init__(self):
        if self.errors is None:
            self.errors = []

    @property
    def total_processed(self) -> int:
        """Total number of successfully processed guides."""
        return self.inserted + self.updated

    def __str__(self) -> str:
        return (
            f"UpsertResult(inserted={self.inserted}, updated={self.updated}, "
            f"failed={self.failed}, removed={self.removed})"
        )


def _sort_by_date(guides: List[Guide]) -> List[Guide]:
    """Newest first, then title for a stable order."""
    return sorted(guides, key=lambda g: (-g.published_at.toordinal(), g.title.lower()))


def _merge_records(
    records: Dict[str, Guide],
    guides: List[Guide],
    remove: Optional[Iterable[str]],
    result: UpsertResult,
) -> Dict[str, Guide]:
    """
    Apply an upsert to a copy of records and count the changes in result.

    Replaced guides keep their original created_at.
    """
    merged = dict(records)
    keep = {g.slug for g in guides}

    for slug in set(remove or ()) - keep:
        if merged.pop(slug, None) is not None:
            result.removed += 1

    for guide in guides:
        existing = merged.get(guide.slug)
        if existing is not None:
            guide.created_at = existing.created_at
            guide.updated_at = datetime.now()
            result.updated += 1
        else:
            result.inserted += 1
        merged[guide.slug] = guide

    return merged


class Catalog(ABC):
    """
    Abstract base class for all catalog backends.

    Implementations must provide:
    - Upserting guides (insert or replace by slug)
    - Returning every stored guide

    All implementations should be idempotent: upserting the same guide
    twice must not create a duplicate.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Return the name of this catalog backend.

        Used for logging and debugging.
        """
        pass

    @abstractmethod
    def upsert_guides(self, guides: List[Guide], remove: Optional[Iterable[str]] = None) -> UpsertResult:
        """
        Insert or replace guides, keyed by slug.

        Args:
            guides: List of Guide instances to store.
            remove: Slugs to drop from the catalog. Slugs also present in
                guides are kept.

        Returns:
            UpsertResult with counts of inserted/updated/failed guides.
        """
        pass

    @abstractmethod
    def all_guides(self) -> List[Guide]:
        """
        Return every guide in the catalog.

        Returns:
            List of Guide instances, newest first.
        """
        pass

    def count(self) -> int:
        """Number of guides in the catalog."""
        return len(self.all_guides())

    def get_guide(self, slug: str) -> Optional[Guide]:
        """
        Retrieve a single guide by slug.

        Args:
            slug: The guide's slug (e.g., "docker-container-security").

        Returns:
            Guide if found, None otherwise.
        """
        for guide in self.all_guides():
            if guide.slug == slug:
                return guide
        return None

    def filter_guides(
        self,
        tags: Optional[List[str]] = None,
        category: Optional[str] = None,
        type: Optional[str] = None,
        match_all: bool = False,
    ) -> List[Guide]:
        """
        List guides matching tag, category and type filters.

        All comparisons are case-insensitive. Filters that are None or
        empty are ignored.

        Args:
            tags: Tags to match.
            category: Category to match.
            type: Document type to match.
            match_all: If True a guide must carry every tag, otherwise any.

        Returns:
            Matching guides, newest first then by title.
        """
        wanted = [t.strip().lower() for t in (tags or []) if t and t.strip()]
        guides = self.all_guides()

        if wanted:
            if match_all:
                guides = [g for g in guides if all(g.has_tag(t) for t in wanted)]
            else:
                guides = [g for g in guides if any(g.has_tag(t) for t in wanted)]

        if category:
            guides = [g for g in guides if g.category.lower() == category.strip().lower()]

        if type:
            guides = [g for g in guides if g.type.lower() == type.strip().lower()]

        return _sort_by_date(guides)

    def get_recent_guides(self, days: int = 30, today: Optional[date] = None) -> List[Guide]:
        """
        Retrieve guides published in the last N days.

        Args:
            days: Number of days to look back (default 30).
            today: Reference date (for testing). Defaults to date.today().

        Returns:
            List of Guide instances, newest first.
        """
        if today is None:
            today = date.today()
        cutoff = today - timedelta(days=days)
        return _sort_by_date([g for g in self.all_guides() if g.published_at >= cutoff])

    def search_guides(self, query: str, limit: int = 50) -> List[Guide]:
        """
        Search guides for a text query.

        Every whitespace-separated term must appear (case-insensitive) in
        the title, description, tags or rendered body text (Markdown syntax
        and link URLs are not searched). Matches in the title count most,
        then tags and description, then body.

        Args:
            query: Search query string.
            limit: Maximum number of results (default 50).

        Returns:
            Matching guides, best match first.
        """
        terms = [t.lower() for t in query.split()]
        if not terms:
            return []

        ranked = []
        for guide in self.all_guides():
            title = guide.title.lower()
            description = guide.description.lower()
            tags = " ".join(guide.tags)
            body = render_guide(guide).text.lower()

            rank = 0
            for term in terms:
                term_rank = (
                    3 * (term in title)
                    + 2 * (term in tags)
                    + 2 * (term in description)
                    + (term in body)
                )
                if term_rank == 0:
                    break
                rank += term_rank
            else:
                ranked.append((rank, guide))

        ranked.sort(key=lambda pair: (-pair[0], pair[1].title.lower()))
        return [guide for _, guide in ranked[:limit]]

    def list_tags(self) -> Dict[str, int]:
        """Tag -> number of guides, most used first then alphabetical."""
        counts = Counter(tag for g in self.all_guides() for tag in g.tags)
        return dict(sorted(counts.items(), key=lambda kv: (-kv[1], kv[0])))

    def list_categories(self) -> Dict[str, int]:
        """Category -> number of guides, alphabetical."""
        counts = Counter(g.category for g in self.all_guides())
        return dict(sorted(counts.items()))

    def list_types(self) -> Dict[str, int]:
        """Document type -> number of guides, alphabetical."""
        counts = Counter(g.type for g in self.all_guides())
        return dict(sorted(counts.items()))

    def __str__(self) -> str:
        return f"Catalog({self.name})"

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
