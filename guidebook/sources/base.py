"""
Base source abstraction for Guidebook.

Defines the abstract interface that all document sources must implement.
"""

from abc import ABC, abstractmethod
from typing import List

from guidebook.models.guide import RawDocument


class Source(ABC):
    """
    Abstract base class for all guide sources.
    
    Each source (local directory, remote URLs, etc.) must implement
    this interface to be used in the pipeline.
    
    Attributes:
        name: Unique identifier for this source (e.g., "local", "remote").
    """
    
    @property
    @abstractmethod
    def name(self) -> str:
        """
        Return the unique name identifier for this source.
        
        This name is used in RawDocument.source_name and for logging.
        Should be lowercase, no spaces (e.g., "local", "remote").
        """
        pass
    
    @abstractmethod
    def fetch_documents(self, limit: int | None = None) -> List[RawDocument]:
        """
        Fetch guide files from this source as RawDocument instances.
        
        Implementations should:
        - Respect the limit parameter (None means no limit)
        - Skip files that cannot be read, printing why
        - Return documents in a deterministic order
        - Return an empty list on complete failure (don't raise exceptions)
        
        Args:
            limit: Maximum number of documents to fetch. If None, fetch all.
            
        Returns:
            List of RawDocument instances (may be empty).
        """
        pass
    
    def __str__(self) -> str:
        return f"Source({self.name})"
    
    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
