"""
JSON file catalog.

Persists the catalog to a single JSON file so the dashboard can serve the
result of the last pipeline run:

    {
      "version": 1,
      "updated_at": "2024-05-02T09:30:00",
      "guides": [ {...Guide.to_dict()...}, ... ]
    }

The file is loaded on first use and rewritten after every upsert. A
live pipeline run passes the slugs of guides that no longer pass lint
(or no longer exist) as removals, so the file only lists current guides.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from guidebook.catalog.base import Catalog, CatalogError, UpsertResult, _merge_records, _sort_by_date
from guidebook.config import CATALOG_PATH
from guidebook.models.guide import Guide


CATALOG_FORMAT_VERSION = 1


class JsonFileCatalog(Catalog):
    """
    Catalog persisted to a JSON file.
    
    Same upsert semantics as InMemoryCatalog: guides are keyed by slug and
    re-upserting a guide replaces it.
    """
    
    def __init__(self, path: Optional[str] = None):
        """
        Initialize the catalog.
        
        Args:
            path: JSON file location. Defaults to CATALOG_PATH.
        """
        self.path = Path(path or CATALOG_PATH)
        self._records: Optional[Dict[str, Guide]] = None
    
    @property
    def name(self) -> str:
        return "json"
    
    def _load(self) -> Dict[str, Guide]:
        """
        Load records from disk (once).
        
        Raises:
            CatalogError: If the file exists but cannot be parsed.
        """
        if self._records is not None:
            return self._records
        
        records: Dict[str, Guide] = {}
        if self.path.exists():
            try:
                data = json.loads(self.path.read_text(encoding="utf-8"))
                for entry in data.get("guides", []):
                    guide = Guide.from_dict(entry)
                    records[guide.slug] = guide
            except (OSError, json.JSONDecodeError, AttributeError, TypeError, ValueError) as e:
                raise CatalogError(f"Cannot read catalog {self.path}: {e}") from e
        
        self._records = records
        return records
    
    def _save(self, records: Dict[str, Guide]) -> None:
        """Write records to disk."""
        payload = {
            "version": CATALOG_FORMAT_VERSION,
            "updated_at": datetime.now().isoformat(),
            "guides": [g.to_dict() for g in _sort_by_date(list(records.values()))],
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(payload, indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
    
    def upsert_guides(self, guides: List[Guide], remove: Optional[Iterable[str]] = None) -> UpsertResult:
        """
        Insert or replace guides, drop removed slugs and persist the catalog.
        
        The cached records change only after the file is written.
        """
        result = UpsertResult()
        records = _merge_records(self._load(), guides, remove, result)
        
        try:
            self._save(records)
        except OSError as e:
            result.failed = result.inserted + result.updated
            result.inserted = 0
            result.updated = 0
            result.removed = 0
            result.errors.append(f"Cannot write catalog {self.path}: {e}")
            return result
        
        self._records = records
        return result
    
    def all_guides(self) -> List[Guide]:
        return _sort_by_date(list(self._load().values()))
    
    def get_guide(self, slug: str) -> Optional[Guide]:
        return self._load().get(slug)
    
    def reload(self) -> None:
        """Drop cached records so the next access re-reads the file."""
        self._records = None
