"""
Remote source implementation.

Fetches guide Markdown files over HTTP, e.g. raw files from a Git host:
https://raw.githubusercontent.com/<owner>/<repo>/main/guides/docker-security.md
"""

from typing import List, Optional
import requests

from guidebook.config import REMOTE_GUIDE_URLS, REQUEST_TIMEOUT
from guidebook.models.guide import RawDocument
from guidebook.sources.base import Source


class RemoteSource(Source):
    """
    Fetches guide files from a list of URLs.
    
    Each URL is fetched independently; a failing URL is skipped and the
    remaining ones are still fetched.
    """
    
    def __init__(self, urls: Optional[List[str]] = None, timeout: Optional[int] = None):
        """
        Initialize the source.
        
        Args:
            urls: URLs of raw Markdown files. Defaults to REMOTE_GUIDE_URLS.
            timeout: Request timeout in seconds. Defaults to REQUEST_TIMEOUT.
        """
        self.urls = list(urls) if urls is not None else list(REMOTE_GUIDE_URLS)
        self.timeout = timeout or REQUEST_TIMEOUT
    
    @property
    def name(self) -> str:
        return "remote"
    
    def fetch_documents(self, limit: int | None = None) -> List[RawDocument]:
        """
        Fetch guide files from the configured URLs.
        
        Args:
            limit: Maximum number of URLs to fetch. None fetches all.
            
        Returns:
            List of RawDocument instances in URL order.
        """
        urls = self.urls if limit is None else self.urls[:limit]
        if not urls:
            print(f"[{self.name}] No URLs configured")
            return []
        
        documents: List[RawDocument] = []
        for url in urls:
            text = self._fetch_url(url)
            if text is not None:
                documents.append(RawDocument(path=url, text=text, source_name=self.name))
        
        print(f"[{self.name}] Fetched {len(documents)} documents (requested {len(urls)})")
        return documents
    
    def _fetch_url(self, url: str) -> Optional[str]:
        """
        Fetch a single URL.
        
        Returns:
            Response body as text, or None on failure.
        """
        try:
            response = requests.get(
                url,
                timeout=self.timeout,
                headers={"Accept": "text/markdown, text/plain;q=0.9, */*;q=0.1"},
            )
            response.raise_for_status()
            # Raw file hosts often omit the charset; guides are UTF-8
            if "charset" not in response.headers.get("Content-Type", "").lower():
                response.encoding = "utf-8"
            return response.text
            
        except requests.RequestException as e:
            print(f"[{self.name}] Error fetching {url}: {e}")
            return None
