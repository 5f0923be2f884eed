"""
In-memory catalog.

Use this for dry runs, the inline linter and tests. Data is lost when
the process ends.
"""

from typing import Dict, Iterable, List, Optional

from guidebook.catalog.base import Catalog, UpsertResult, _merge_records, _sort_by_date
from guidebook.models.guide import Guide


class InMemoryCatalog(Catalog):
    """Catalog backed by a dict keyed by slug."""
    
    def __init__(self, guides: Optional[List[Guide]] = None):
        self._records: Dict[str, Guide] = {}
        if guides:
            self.upsert_guides(guides)
    
    @property
    def name(self) -> str:
        return "memory"
    
    def upsert_guides(self, guides: List[Guide], remove: Optional[Iterable[str]] = None) -> UpsertResult:
        """Store guides in memory with idempotent behavior."""
        result = UpsertResult()
        self._records = _merge_records(self._records, guides, remove, result)
        return result
    
    def all_guides(self) -> List[Guide]:
        return _sort_by_date(list(self._records.values()))
    
    def get_guide(self, slug: str) -> Optional[Guide]:
        """Get a single guide by slug."""
        return self._records.get(slug)
    
    def clear(self) -> None:
        """Remove all guides."""
        self._records.clear()
    
    def count(self) -> int:
        return len(self._records)
