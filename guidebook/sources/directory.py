"""
Local directory source.

Reads guide Markdown files from a content directory on disk.
"""

from pathlib import Path
from typing import List, Optional

from guidebook.config import CONTENT_DIR, CONTENT_GLOB
from guidebook.models.guide import RawDocument
from guidebook.sources.base import Source


class DirectorySource(Source):
    """
    Reads every file matching a glob pattern under a content directory.
    
    Files are returned sorted by relative path so runs are reproducible.
    Files that cannot be read or decoded as UTF-8 are skipped.
    """
    
    def __init__(self, content_dir: Optional[str] = None, pattern: Optional[str] = None):
        """
        Initialize the source.
        
        Args:
            content_dir: Directory to scan. Defaults to CONTENT_DIR.
            pattern: Glob pattern relative to content_dir. Defaults to CONTENT_GLOB.
        """
        self.content_dir = Path(content_dir or CONTENT_DIR)
        self.pattern = pattern or CONTENT_GLOB
    
    @property
    def name(self) -> str:
        return "local"
    
    def fetch_documents(self, limit: int | None = None) -> List[RawDocument]:
        """
        Read guide files from the content directory.
        
        Args:
            limit: Maximum number of files to read. None reads all.
            
        Returns:
            List of RawDocument instances, sorted by path.
        """
        if not self.content_dir.is_dir():
            print(f"[{self.name}] Content directory not found: {self.content_dir}")
            return []
        
        paths = sorted(p for p in self.content_dir.glob(self.pattern) if p.is_file())
        if limit is not None:
            paths = paths[:limit]
        
        documents: List[RawDocument] = []
        for path in paths:
            document = self._read_file(path)
            if document is not None:
                documents.append(document)
        
        print(f"[{self.name}] Read {len(documents)} files from {self.content_dir}")
        return documents
    
    def _read_file(self, path: Path) -> Optional[RawDocument]:
        """
        Read a single file.
        
        Returns:
            RawDocument, or None if the file cannot be read.
        """
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            print(f"[{self.name}] Error reading {path}: {e}")
            return None
        
        display_path = path.relative_to(self.content_dir).as_posix()
        return RawDocument(path=display_path, text=text, source_name=self.name)
