"""
Tests for source abstraction and implementations.

Tests the Source interface contract, directory reading, remote fetching
with mocked HTTP, and error handling.
"""

import pytest
from unittest.mock import Mock, patch
import requests

from guidebook.sources import Source, DirectorySource, RemoteSource
from guidebook.models import RawDocument
from tests.test_config import get_document


# =============================================================================
# Test Source Interface Contract
# =============================================================================

class TestSourceInterface:
    """Tests for the Source abstract base class contract."""

    def test_source_is_abstract(self):
        """Source cannot be instantiated directly."""
        with pytest.raises(TypeError):
            Source()

    def test_source_requires_fetch_documents_method(self):
        """Concrete sources must implement fetch_documents."""
        class IncompleteSource(Source):
            @property
            def name(self):
                return "incomplete"

        with pytest.raises(TypeError):
            IncompleteSource()

    def test_complete_source_can_be_instantiated(self):
        class CompleteSource(Source):
            @property
            def name(self):
                return "complete"

            def fetch_documents(self, limit=None):
                return []

        source = CompleteSource()
        assert source.fetch_documents() == []
        assert "complete" in str(source)
        assert "CompleteSource" in repr(source)


# =============================================================================
# Test DirectorySource
# =============================================================================

class TestDirectorySource:

    def test_reads_markdown_files_sorted(self, content_dir):
        documents = DirectorySource(content_dir=str(content_dir)).fetch_documents()
        assert [d.path for d in documents] == ["docker-container-security.md", "open-fence.md"]
        assert all(d.source_name == "local" for d in documents)
        assert documents[0].text == get_document("valid")

    def test_nested_directories_use_posix_paths(self, tmp_path):
        nested = tmp_path / "security" / "cloud"
        nested.mkdir(parents=True)
        (nested / "aws-s3-security.md").write_text(get_document("valid"), encoding="utf-8")

        documents = DirectorySource(content_dir=str(tmp_path)).fetch_documents()
        assert [d.path for d in documents] == ["security/cloud/aws-s3-security.md"]

    def test_ignores_other_extensions(self, content_dir):
        (content_dir / "notes.txt").write_text("not a guide", encoding="utf-8")
        documents = DirectorySource(content_dir=str(content_dir)).fetch_documents()
        assert len(documents) == 2

    def test_custom_pattern(self, content_dir):
        documents = DirectorySource(content_dir=str(content_dir), pattern="docker-*.md").fetch_documents()
        assert [d.path for d in documents] == ["docker-container-security.md"]

    def test_limit(self, content_dir):
        documents = DirectorySource(content_dir=str(content_dir)).fetch_documents(limit=1)
        assert len(documents) == 1

    def test_missing_directory_returns_empty(self, tmp_path, capsys):
        source = DirectorySource(content_dir=str(tmp_path / "nope"))
        assert source.fetch_documents() == []
        assert "not found" in capsys.readouterr().out

    def test_undecodable_file_skipped(self, content_dir, capsys):
        (content_dir / "binary.md").write_bytes(b"\xff\xfe\x00bad")
        documents = DirectorySource(content_dir=str(content_dir)).fetch_documents()
        assert "binary.md" not in [d.path for d in documents]
        assert len(documents) == 2
        assert "Error reading" in capsys.readouterr().out


# =============================================================================
# Test RemoteSource
# =============================================================================

def _response(text: str, content_type: str = "text/plain; charset=utf-8") -> Mock:
    response = Mock()
    response.text = text
    response.headers = {"Content-Type": content_type}
    response.raise_for_status = Mock()
    return response


class TestRemoteSource:

    URLS = [
        "https://raw.example.com/guides/docker-container-security.md",
        "https://raw.example.com/guides/aws-s3-security.md",
    ]

    def test_fetches_each_url(self):
        with patch("guidebook.sources.remote.requests.get") as mock_get:
            mock_get.return_value = _response(get_document("valid"))
            documents = RemoteSource(urls=self.URLS, timeout=5).fetch_documents()

        assert [d.path for d in documents] == self.URLS
        assert all(d.source_name == "remote" for d in documents)
        assert mock_get.call_count == 2
        assert mock_get.call_args.kwargs["timeout"] == 5

    def test_missing_charset_forces_utf8(self):
        response = _response(get_document("valid"), content_type="text/plain")
        with patch("guidebook.sources.remote.requests.get", return_value=response):
            RemoteSource(urls=self.URLS[:1]).fetch_documents()
        assert response.encoding == "utf-8"

    def test_failing_url_is_skipped(self):
        ok = _response(get_document("valid"))
        with patch("guidebook.sources.remote.requests.get") as mock_get:
            mock_get.side_effect = [requests.ConnectionError("boom"), ok]
            documents = RemoteSource(urls=self.URLS).fetch_documents()

        assert [d.path for d in documents] == self.URLS[1:]

    def test_http_error_is_skipped(self):
        bad = _response("Not Found")
        bad.raise_for_status.side_effect = requests.HTTPError("404")
        with patch("guidebook.sources.remote.requests.get", return_value=bad):
            assert RemoteSource(urls=self.URLS[:1]).fetch_documents() == []

    def test_limit(self):
        with patch("guidebook.sources.remote.requests.get") as mock_get:
            mock_get.return_value = _response(get_document("valid"))
            documents = RemoteSource(urls=self.URLS).fetch_documents(limit=1)
        assert len(documents) == 1
        assert mock_get.call_count == 1

    def test_no_urls(self, capsys):
        with patch("guidebook.sources.remote.requests.get") as mock_get:
            assert RemoteSource(urls=[]).fetch_documents() == []
        mock_get.assert_not_called()
        assert "No URLs configured" in capsys.readouterr().out

    def test_documents_are_raw_documents(self):
        with patch("guidebook.sources.remote.requests.get", return_value=_response("---\n")):
            documents = RemoteSource(urls=self.URLS[:1]).fetch_documents()
        assert isinstance(documents[0], RawDocument)
