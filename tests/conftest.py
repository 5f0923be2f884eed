"""
Pytest Configuration and Fixtures

This module provides:
- Custom test output formatting
- Timestamped result file generation
- Shared fixtures for all tests
- Test category organization
"""

import pytest
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Dict, Any

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

# Import test configuration
from tests.test_config import (
    CONFIG, EXPECTED, TEST_DATA, TEST_CATEGORIES,
    get_document, get_sample_guide, get_all_sample_guides,
)


# =============================================================================
# TEST RESULT FILE CONFIGURATION
# =============================================================================

RESULTS_DIR = PROJECT_ROOT / "test_results"


def get_result_filename() -> str:
    """Generate timestamped result filename."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"test_results_{timestamp}.txt"


def ensure_results_dir():
    """Create results directory if it doesn't exist."""
    RESULTS_DIR.mkdir(exist_ok=True)


# =============================================================================
# PYTEST HOOKS FOR CUSTOM OUTPUT
# =============================================================================

class TestResultCollector:
    """Collects test results for formatted output."""

    __test__ = False

    def __init__(self):
        self.results: List[Dict[str, Any]] = []
        self.start_time: datetime = None
        self.end_time: datetime = None
        self.categories: Dict[str, List[Dict]] = {}

    def add_result(self, nodeid: str, outcome: str, duration: float, message: str = ""):
        """Add a test result."""
        category = self._extract_category(nodeid)

        result = {
            "nodeid": nodeid,
            "name": self._extract_test_name(nodeid),
            "category": category,
            "outcome": outcome,
            "duration": duration,
            "message": message,
        }

        self.results.append(result)
        self.categories.setdefault(category, []).append(result)

    def _extract_category(self, nodeid: str) -> str:
        """Extract test category from nodeid."""
        # nodeid format: tests/test_linting.py::TestClass::test_method
        parts = nodeid.split("::")
        if parts:
            filename = parts[0].split("/")[-1]
            return filename.replace("test_", "", 1).replace(".py", "")
        return "unknown"

    def _extract_test_name(self, nodeid: str) -> str:
        """Extract readable test name from nodeid."""
        parts = nodeid.split("::")
        if len(parts) >= 2:
            method_name = parts[-1]
            return method_name.replace("test_", "", 1).replace("_", " ").title()
        return nodeid

    def get_summary(self) -> Dict[str, int]:
        """Get test result summary."""
        passed = sum(1 for r in self.results if r["outcome"] == "passed")
        failed = sum(1 for r in self.results if r["outcome"] == "failed")
        skipped = sum(1 for r in self.results if r["outcome"] == "skipped")

        return {
            "total": len(self.results),
            "passed": passed,
            "failed": failed,
            "skipped": skipped,
        }


# Global collector instance
_collector = TestResultCollector()


def pytest_configure(config):
    """Register custom markers and start the result collector."""
    config.addinivalue_line(
        "markers", "config_validation: Configuration validation tests"
    )
    config.addinivalue_line(
        "markers", "cli_behavior: CLI interface tests"
    )
    config.addinivalue_line(
        "markers", "content_corpus: Shipped content linting tests"
    )

    _collector.start_time = datetime.now()
    ensure_results_dir()


def pytest_runtest_logreport(report):
    """Called after each test phase."""
    if report.when == "call":  # Only record the actual test call
        _collector.add_result(
            nodeid=report.nodeid,
            outcome=report.outcome,
            duration=report.duration,
            message=str(report.longrepr) if report.longrepr else "",
        )


def pytest_sessionfinish(session, exitstatus):
    """Called after all tests complete."""
    _collector.end_time = datetime.now()

    report = generate_formatted_report(_collector)
    save_report(report)

    print_summary(_collector)


def generate_formatted_report(collector: TestResultCollector) -> str:
    """Generate a formatted test report."""
    lines = []

    # Header
    lines.append("=" * 80)
    lines.append("GUIDEBOOK - TEST RESULTS REPORT")
    lines.append("=" * 80)
    lines.append("")

    # Timestamp and duration
    lines.append(f"Run Date:     {collector.start_time.strftime('%Y-%m-%d %H:%M:%S')}")
    if collector.end_time:
        duration = (collector.end_time - collector.start_time).total_seconds()
        lines.append(f"Duration:     {duration:.2f} seconds")
    lines.append("")

    # Summary
    summary = collector.get_summary()
    lines.append("-" * 40)
    lines.append("SUMMARY")
    lines.append("-" * 40)
    lines.append(f"Total Tests:  {summary['total']}")
    lines.append(f"Passed:       {summary['passed']} ✓")
    lines.append(f"Failed:       {summary['failed']} ✗")
    lines.append(f"Skipped:      {summary['skipped']} ○")
    lines.append(f"Pass Rate:    {(summary['passed'] / max(summary['total'], 1) * 100):.1f}%")
    lines.append("")

    # Results by category
    lines.append("=" * 80)
    lines.append("RESULTS BY CATEGORY")
    lines.append("=" * 80)

    for category, results in sorted(collector.categories.items()):
        cat_info = TEST_CATEGORIES.get(category, {
            "name": category.replace("_", " ").title(),
            "description": "Test category",
            "protects_against": [],
        })

        passed = sum(1 for r in results if r["outcome"] == "passed")
        failed = sum(1 for r in results if r["outcome"] == "failed")

        lines.append("")
        lines.append(f"┌{'─' * 78}┐")
        lines.append(f"│ {cat_info['name']:<76} │")
        lines.append(f"├{'─' * 78}┤")
        lines.append(f"│ {cat_info['description']:<76} │")
        lines.append(f"│ Tests: {passed} passed, {failed} failed{' ' * (58 - len(str(passed)) - len(str(failed)))} │")
        lines.append(f"└{'─' * 78}┘")

        if cat_info.get("protects_against"):
            lines.append("  Protects Against:")
            for protection in cat_info["protects_against"]:
                lines.append(f"    • {protection}")

        lines.append("")
        lines.append("  Test Results:")

        for result in results:
            status = "✓" if result["outcome"] == "passed" else "✗" if result["outcome"] == "failed" else "○"
            duration_str = f"({result['duration']*1000:.0f}ms)"
            lines.append(f"    {status} {result['name']:<55} {duration_str:>10}")

            if result["outcome"] == "failed" and result["message"]:
                msg_lines = result["message"].split("\n")[:3]
                for msg_line in msg_lines:
                    if msg_line.strip():
                        lines.append(f"      └─ {msg_line[:70]}")

        lines.append("")

    # Failed tests detail
    failed_tests = [r for r in collector.results if r["outcome"] == "failed"]
    if failed_tests:
        lines.append("=" * 80)
        lines.append("FAILED TESTS DETAIL")
        lines.append("=" * 80)

        for result in failed_tests:
            lines.append("")
            lines.append(f"FAILED: {result['nodeid']}")
            lines.append("-" * 40)
            if result["message"]:
                for line in result["message"].split("\n")[:10]:
                    lines.append(f"  {line}")
            lines.append("")

    # Footer
    lines.append("=" * 80)
    lines.append("END OF REPORT")
    lines.append("=" * 80)

    return "\n".join(lines)


def save_report(report: str):
    """Save report to timestamped file."""
    filepath = RESULTS_DIR / get_result_filename()
    filepath.write_text(report, encoding="utf-8")

    print(f"\n📄 Test results saved to: {filepath}")


def print_summary(collector: TestResultCollector):
    """Print summary to console."""
    summary = collector.get_summary()

    print("\n" + "=" * 60)
    print("TEST RUN COMPLETE")
    print("=" * 60)
    print(f"Total: {summary['total']} | Passed: {summary['passed']} | Failed: {summary['failed']} | Skipped: {summary['skipped']}")
    print(f"Pass Rate: {(summary['passed'] / max(summary['total'], 1) * 100):.1f}%")
    print("=" * 60)


# =============================================================================
# SHARED FIXTURES
# =============================================================================

@pytest.fixture
def today():
    """Fixed reference date for date-sensitive checks."""
    return CONFIG["today"]


@pytest.fixture
def valid_text():
    """A complete, valid guide file."""
    return get_document("valid")


@pytest.fixture
def sample_guide():
    """A single sample Guide."""
    from guidebook.models import Guide
    return Guide(**get_sample_guide(0))


@pytest.fixture
def sample_guides():
    """All sample Guides."""
    from guidebook.models import Guide
    return [Guide(**data) for data in get_all_sample_guides()]


@pytest.fixture
def memory_catalog(sample_guides):
    """An in-memory catalog holding the sample guides."""
    from guidebook.catalog import InMemoryCatalog
    return InMemoryCatalog(sample_guides)


@pytest.fixture
def content_dir(tmp_path):
    """A content directory with one valid and one broken guide."""
    directory = tmp_path / "content"
    directory.mkdir()
    (directory / "docker-container-security.md").write_text(get_document("valid"), encoding="utf-8")
    (directory / "open-fence.md").write_text(get_document("unclosed_fence"), encoding="utf-8")
    return directory


@pytest.fixture
def valid_content_dir(tmp_path):
    """A content directory where every guide passes."""
    directory = tmp_path / "content"
    directory.mkdir()
    (directory / "docker-container-security.md").write_text(get_document("valid"), encoding="utf-8")
    return directory


@pytest.fixture
def test_config():
    """Provide access to test configuration."""
    return CONFIG


@pytest.fixture
def expected_values():
    """Provide access to expected values."""
    return EXPECTED


@pytest.fixture
def test_data():
    """Provide access to test data."""
    return TEST_DATA


@pytest.fixture
def temp_output_dir(tmp_path):
    """Provide a temporary output directory."""
    output_dir = tmp_path / "output"
    output_dir.mkdir()
    return output_dir
