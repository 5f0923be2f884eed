"""
Report Generator for Guidebook.

Generates a dated Markdown report from a pipeline run: lint results for
every checked document, then the catalog grouped by category, then a tag
index.

Output: reports/YYYY-MM-DD.md
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Dict, Optional
from collections import defaultdict

from guidebook.catalog.base import Catalog
from guidebook.linting.linter import LintResult
from guidebook.models.guide import Guide


# =============================================================================
# Report Configuration
# =============================================================================

@dataclass
class ReportConfig:
    """
    Configuration for report generation.

    Attributes:
        output_dir: Directory to write report files.
        include_passing: List documents without issues in the lint section.
        include_catalog: Include the catalog and tag sections.
    """
    output_dir: str = "reports"
    include_passing: bool = False
    include_catalog: bool = True


# =============================================================================
# Report Result
# =============================================================================

@dataclass
class ReportResult:
    """
    Result of report generation.

    Attributes:
        success: Whether the report was written.
        filepath: Path to the generated report file.
        documents: Number of documents covered by the lint section.
        errors: Total lint errors reported.
        warnings: Total lint warnings reported.
        categories: Categories listed in the catalog section.
        error: Error message if generation failed.
    """
    success: bool
    filepath: Optional[str] = None
    documents: int = 0
    errors: int = 0
    warnings: int = 0
    categories: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def filename(self) -> Optional[str]:
        return Path(self.filepath).name if self.filepath else None


# =============================================================================
# Report Generator
# =============================================================================

class ReportGenerator:
    """
    Generates report files from lint results and the catalog.

    Usage:
        generator = ReportGenerator(catalog)
        result = generator.generate(lint_results)
        print(f"Report saved to: {result.filepath}")
    """

    def __init__(self, catalog: Catalog, config: ReportConfig = None):
        """
        Initialize the report generator.

        Args:
            catalog: Catalog to list guides from.
            config: Report configuration. Defaults to ReportConfig().
        """
        self.catalog = catalog
        self.config = config or ReportConfig()

    def generate(self, lint_results: List[LintResult], date: datetime = None) -> ReportResult:
        """
        Generate the report.

        Args:
            lint_results: Results of the lint stage.
            date: Date for the report filename. Defaults to now.

        Returns:
            ReportResult with success status and file path.
        """
        if date is None:
            date = datetime.now()

        try:
            guides = self.catalog.all_guides()
            grouped = self._group_by_category(guides)
            content = self.build_markdown(lint_results, guides, grouped, date)
            filepath = self._write_file(content, date)

            return ReportResult(
                success=True,
                filepath=str(filepath),
                documents=len(lint_results),
                errors=sum(len(r.errors) for r in lint_results),
                warnings=sum(len(r.warnings) for r in lint_results),
                categories=sorted(grouped.keys()),
            )

        except Exception as e:
            return ReportResult(
                success=False,
                error=str(e),
            )

    def _group_by_category(self, guides: List[Guide]) -> Dict[str, List[Guide]]:
        """
        Group guides by category, newest first within each group.
        """
        grouped: Dict[str, List[Guide]] = defaultdict(list)
        for guide in guides:
            grouped[guide.category].append(guide)

        for category in grouped:
            grouped[category].sort(key=lambda g: (-g.published_at.toordinal(), g.title.lower()))

        return dict(grouped)

    def build_markdown(
        self,
        lint_results: List[LintResult],
        guides: List[Guide],
        grouped: Dict[str, List[Guide]],
        date: datetime,
    ) -> str:
        """
        Build the Markdown content of the report.

        Args:
            lint_results: Results of the lint stage.
            guides: All catalogued guides.
            grouped: Guides grouped by category.
            date: Date for the header.

        Returns:
            Markdown string.
        """
        lines = []

        lines.append(f"# Guidebook Report - {date.strftime('%Y-%m-%d')}")
        lines.append("")
        lines.append(f"*Generated on {date.strftime('%B %d, %Y at %H:%M')}*")
        lines.append("")

        lines.extend(self._generate_summary(lint_results, guides, grouped))
        lines.extend(self._generate_lint_section(lint_results))

        if self.config.include_catalog:
            lines.extend(self._generate_catalog_section(grouped))
            lines.extend(self._generate_tag_section())

        lines.append("---")
        lines.append("")
        lines.append("*Generated by Guidebook*")
        lines.append("")

        return "\n".join(lines)

    def _generate_summary(
        self,
        lint_results: List[LintResult],
        guides: List[Guide],
        grouped: Dict[str, List[Guide]],
    ) -> List[str]:
        """Generate the summary section."""
        passed = sum(1 for r in lint_results if r.ok)
        errors = sum(len(r.errors) for r in lint_results)
        warnings = sum(len(r.warnings) for r in lint_results)

        lines = ["## Summary", ""]
        lines.append(f"- **Documents checked:** {len(lint_results)}")
        lines.append(f"- **Passed:** {passed}")
        lines.append(f"- **Failed:** {len(lint_results) - passed}")
        lines.append(f"- **Errors:** {errors}")
        lines.append(f"- **Warnings:** {warnings}")
        lines.append(f"- **Guides in catalog:** {len(guides)}")
        if grouped:
            categories = ", ".join(f"{c} ({len(g)})" for c, g in sorted(grouped.items()))
            lines.append(f"- **Categories:** {categories}")
        lines.append("")
        return lines

    def _generate_lint_section(self, lint_results: List[LintResult]) -> List[str]:
        """Generate the lint results section."""
        lines = ["## Lint Results", ""]

        shown = [
            r for r in sorted(lint_results, key=lambda r: r.path)
            if r.issues or self.config.include_passing
        ]
        if not shown:
            lines.append("No issues found.")
            lines.append("")
            return lines

        for result in shown:
            status = "FAIL" if not result.ok else ("WARN" if result.issues else "OK")
            lines.append(f"### `{result.path}` - {status}")
            lines.append("")
            if not result.issues:
                lines.append("No issues.")
                lines.append("")
                continue

            lines.append("| Line | Severity | Rule | Message |")
            lines.append("|---|---|---|---|")
            for issue in result.issues:
                line = str(issue.line) if issue.line else "-"
                message = issue.message.replace("|", "\\|")
                lines.append(f"| {line} | {issue.severity} | `{issue.rule}` | {message} |")
            lines.append("")

        return lines

    def _generate_catalog_section(self, grouped: Dict[str, List[Guide]]) -> List[str]:
        """Generate the catalog section, one subsection per category."""
        lines = ["## Catalog", ""]

        if not grouped:
            lines.append("The catalog is empty.")
            lines.append("")
            return lines

        for category in sorted(grouped.keys(), key=str.lower):
            lines.append(f"### {category}")
            lines.append("")
            for guide in grouped[category]:
                lines.extend(self._format_guide(guide))
            lines.append("")

        return lines

    def _format_guide(self, guide: Guide) -> List[str]:
        """Format a single guide as a list entry."""
        icon = f"{guide.icon} " if guide.icon else ""
        tags = " ".join(f"#{tag}" for tag in guide.tags)
        lines = [
            f"- {icon}**{guide.title}** ({guide.type}, {guide.published_at.isoformat()})"
            f" - {guide.reading_minutes} min read",
        ]
        if guide.description:
            lines.append(f"  > {guide.description}")
        if tags:
            lines.append(f"  {tags}")
        return lines

    def _generate_tag_section(self) -> List[str]:
        """Generate the tag index."""
        tags = self.catalog.list_tags()
        lines = ["## Tags", ""]
        if not tags:
            lines.append("No tags.")
        else:
            for tag, count in tags.items():
                lines.append(f"- `{tag}`: {count}")
        lines.append("")
        return lines

    def _write_file(self, content: str, date: datetime) -> Path:
        """
        Write report content to file.

        Returns:
            Path to written file.
        """
        output_dir = Path(self.config.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        filepath = output_dir / f"{date.strftime('%Y-%m-%d')}.md"
        filepath.write_text(content, encoding="utf-8")

        return filepath


# =============================================================================
# Convenience Functions
# =============================================================================

def generate_report(
    catalog: Catalog,
    lint_results: List[LintResult],
    output_dir: str = "reports",
    date: datetime = None,
) -> ReportResult:
    """
    Generate a report file.

    Convenience function for simple usage.
    """
    generator = ReportGenerator(catalog, ReportConfig(output_dir=output_dir))
    return generator.generate(lint_results, date)


def generate_report_content(
    lint_results: List[LintResult],
    guides: List[Guide],
    date: datetime = None,
) -> str:
    """
    Generate report content without writing to file.

    Useful for previewing or printing to the console.
    """
    if date is None:
        date = datetime.now()

    from guidebook.catalog.memory import InMemoryCatalog

    generator = ReportGenerator(InMemoryCatalog(guides))
    grouped = generator._group_by_category(guides)
    return generator.build_markdown(lint_results, guides, grouped, date)
