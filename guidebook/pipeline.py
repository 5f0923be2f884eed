"""
Guidebook Pipeline - Core execution logic.

This module orchestrates the complete pipeline:

    Sources → Parse & Lint → Catalog → Report → Summary

Steps:
1. Load configuration from environment and CLI overrides
2. Instantiate sources (local content directory, remote URLs)
3. Read guide files from each source (with error isolation)
4. Parse front matter and lint every document
5. Store guides without lint errors in the catalog
6. Generate the dated report (Markdown)
7. Print execution summary

Design principles:
- Error isolation: one source or document failing doesn't stop others
- Idempotency: safe to run repeatedly; guides are keyed by slug
- Dry-run support: lint without writes (`--dry-run`)
- Read-only content: guide files are never modified
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
import traceback

from guidebook.models.guide import Guide, RawDocument
from guidebook.sources.base import Source
from guidebook.sources import DirectorySource, RemoteSource
from guidebook.linting import LintResult, lint_raw, make_issue
from guidebook.parsing import slugify_path
from guidebook.catalog.base import Catalog, UpsertResult
from guidebook.catalog import InMemoryCatalog, JsonFileCatalog
from guidebook.config import (
    CATALOG_PATH,
    CONTENT_DIR,
    REMOTE_GUIDE_URLS,
    REPORT_OUTPUT_DIR,
    STRICT_MODE,
)
from guidebook.report import ReportGenerator, ReportConfig, ReportResult


# =============================================================================
# Pipeline Result Data Structures
# =============================================================================

@dataclass
class SourceResult:
    """Result of reading from a single source."""
    source_name: str
    documents_fetched: int
    success: bool
    error: Optional[str] = None
    duration_ms: float = 0.0


@dataclass
class PipelineResult:
    """Complete result of a pipeline execution."""
    started_at: datetime
    finished_at: Optional[datetime] = None

    # Source results
    source_results: List[SourceResult] = field(default_factory=list)

    # Lint results, one per document read
    lint_results: List[LintResult] = field(default_factory=list)

    # Guides that passed linting
    guides: List[Guide] = field(default_factory=list)

    # Catalog results (in-memory catalog on dry-run)
    catalog: Optional[Catalog] = None
    upsert_result: Optional[UpsertResult] = None
    dry_run: bool = False
    strict: bool = False

    # Report results (None if dry-run or disabled)
    report_result: Optional[ReportResult] = None

    # Errors
    errors: List[str] = field(default_factory=list)

    @property
    def sources_succeeded(self) -> int:
        """Number of sources that were read successfully."""
        return sum(1 for r in self.source_results if r.success)

    @property
    def sources_failed(self) -> int:
        """Number of sources that failed."""
        return sum(1 for r in self.source_results if not r.success)

    @property
    def total_documents(self) -> int:
        return len(self.lint_results)

    @property
    def documents_passed(self) -> int:
        """Documents that pass under the run's strictness."""
        return sum(1 for r in self.lint_results if r.passed(self.strict))

    @property
    def documents_failed(self) -> int:
        return self.total_documents - self.documents_passed

    @property
    def total_errors(self) -> int:
        return sum(len(r.errors) for r in self.lint_results)

    @property
    def total_warnings(self) -> int:
        return sum(len(r.warnings) for r in self.lint_results)

    @property
    def passed(self) -> bool:
        """True when every document passed and the pipeline itself had no errors."""
        return not self.errors and self.documents_failed == 0

    @property
    def duration_seconds(self) -> float:
        """Total pipeline duration in seconds."""
        if self.finished_at:
            return (self.finished_at - self.started_at).total_seconds()
        return 0.0

    def to_summary(self) -> str:
        """Generate a human-readable summary."""
        lines = [
            "=" * 60,
            "PIPELINE EXECUTION SUMMARY",
            "=" * 60,
            f"Started:  {self.started_at.strftime('%Y-%m-%d %H:%M:%S')}",
            f"Duration: {self.duration_seconds:.2f}s",
            f"Mode:     {'DRY RUN' if self.dry_run else 'LIVE'}{' (strict)' if self.strict else ''}",
            "",
            "Sources:",
        ]

        for sr in self.source_results:
            status = "✓" if sr.success else "✗"
            lines.append(f"  {status} {sr.source_name}: {sr.documents_fetched} documents ({sr.duration_ms:.0f}ms)")
            if sr.error:
                lines.append(f"      Error: {sr.error}")

        lines.extend([
            "",
            f"Documents: {self.total_documents}",
            f"Passed:    {self.documents_passed}",
            f"Failed:    {self.documents_failed}",
            f"Errors:    {self.total_errors}",
            f"Warnings:  {self.total_warnings}",
        ])

        failing = [r for r in self.lint_results if r.issues]
        if failing:
            lines.extend(["", "Issues:"])
            for result in failing:
                lines.append(f"  {result.path}")
                for issue in result.issues:
                    lines.append(f"    {issue}")

        if self.upsert_result and not self.dry_run:
            lines.extend([
                "",
                "Catalog:",
                f"  Inserted: {self.upsert_result.inserted}",
                f"  Updated:  {self.upsert_result.updated}",
                f"  Failed:   {self.upsert_result.failed}",
                f"  Removed:  {self.upsert_result.removed}",
            ])
        elif self.dry_run:
            lines.append("\nCatalog: in-memory only (dry-run mode)")

        if self.report_result and self.report_result.success:
            lines.extend([
                "",
                "Report:",
                f"  File: {self.report_result.filepath}",
                f"  Categories: {', '.join(self.report_result.categories) or '(none)'}",
            ])
        elif self.dry_run:
            lines.append("\nReport: SKIPPED (dry-run mode)")

        if self.errors:
            lines.extend([
                "",
                "Errors:",
            ])
            for error in self.errors[:5]:  # Show first 5
                lines.append(f"  - {error}")

        lines.append("")
        lines.append(f"Result: {'PASSED' if self.passed else 'FAILED'}")
        lines.append("=" * 60)
        return "\n".join(lines)


# =============================================================================
# Pipeline Configuration
# =============================================================================

@dataclass
class PipelineConfig:
    """
    Configuration for a pipeline run.

    CLI arguments override environment defaults.
    """
    content_dir: str = CONTENT_DIR
    remote_urls: List[str] = field(default_factory=lambda: list(REMOTE_GUIDE_URLS))

    # Source selection (None = local, plus remote when URLs are configured)
    sources: Optional[List[str]] = None

    limit: Optional[int] = None
    strict: bool = STRICT_MODE
    dry_run: bool = False
    verbose: bool = False

    # Outputs
    catalog_path: str = CATALOG_PATH
    report_output_dir: str = REPORT_OUTPUT_DIR
    skip_report: bool = False

    @classmethod
    def from_args(cls, args) -> "PipelineConfig":
        """Create config from argparse namespace."""
        config = cls()
        if getattr(args, "content_dir", None):
            config.content_dir = args.content_dir
        if getattr(args, "urls", None):
            config.remote_urls = list(args.urls)
        if getattr(args, "sources", None):
            config.sources = list(args.sources)
        if getattr(args, "limit", None):
            config.limit = args.limit
        if getattr(args, "strict", False):
            config.strict = True
        if getattr(args, "report_dir", None):
            config.report_output_dir = args.report_dir
        config.dry_run = bool(getattr(args, "dry_run", False))
        config.verbose = bool(getattr(args, "verbose", False))
        config.skip_report = bool(getattr(args, "skip_report", False))
        return config


# =============================================================================
# Pipeline Class
# =============================================================================

class GuidebookPipeline:
    """
    Main pipeline for reading, linting and cataloguing guides.

    Usage:
        config = PipelineConfig(content_dir="content", dry_run=True)
        pipeline = GuidebookPipeline(config)
        result = pipeline.run()
        print(result.to_summary())

    The pipeline:
    1. Instantiates the configured sources
    2. Reads from each source independently (errors isolated)
    3. Parses and lints every document
    4. Stores passing guides in the catalog (unless dry-run)
    5. Writes the report and returns a comprehensive result
    """

    def __init__(self, config: PipelineConfig = None):
        """
        Initialize the pipeline.

        Args:
            config: Pipeline configuration. Defaults to PipelineConfig().
        """
        self.config = config or PipelineConfig()

    def _get_registered_sources(self) -> List[Source]:
        """
        Get the sources for this run.

        Returns sources filtered by config.sources if specified. Without a
        selection the remote source is only used when URLs are configured.
        """
        local = DirectorySource(content_dir=self.config.content_dir)
        remote = RemoteSource(urls=self.config.remote_urls)

        if self.config.sources:
            return [s for s in (local, remote) if s.name in self.config.sources]

        if self.config.remote_urls:
            # An empty content dir means remote-only
            return [local, remote] if self.config.content_dir else [remote]
        return [local]

    def _get_catalog(self) -> Catalog:
        """Get the configured catalog backend."""
        if self.config.dry_run or not self.config.catalog_path:
            return InMemoryCatalog()
        return JsonFileCatalog(self.config.catalog_path)

    def _fetch_from_source(self, source: Source) -> tuple[List[RawDocument], SourceResult]:
        """
        Read documents from a single source with error isolation.

        Args:
            source: The source to read from.

        Returns:
            Tuple of (documents, source_result).
        """
        start_time = datetime.now()

        try:
            documents = source.fetch_documents(limit=self.config.limit)
            duration_ms = (datetime.now() - start_time).total_seconds() * 1000

            return documents, SourceResult(
                source_name=source.name,
                documents_fetched=len(documents),
                success=True,
                duration_ms=duration_ms,
            )

        except Exception as e:
            duration_ms = (datetime.now() - start_time).total_seconds() * 1000
            error_msg = f"{type(e).__name__}: {str(e)}"

            if self.config.verbose:
                error_msg += f"\n{traceback.format_exc()}"

            return [], SourceResult(
                source_name=source.name,
                documents_fetched=0,
                success=False,
                error=error_msg,
                duration_ms=duration_ms,
            )

    def _fetch_all_documents(self, sources: List[Source]) -> tuple[List[RawDocument], List[SourceResult]]:
        """
        Read documents from all sources with error isolation.

        One source failing does not affect others.
        """
        all_documents: List[RawDocument] = []
        source_results: List[SourceResult] = []

        for source in sources:
            if self.config.verbose:
                print(f"[{source.name}] Reading documents...")

            documents, result = self._fetch_from_source(source)
            source_results.append(result)
            all_documents.extend(documents)

        return all_documents, source_results

    def _lint_documents(self, documents: List[RawDocument]) -> List[LintResult]:
        """
        Parse and lint every document.

        A second document with an already-seen slug gets a duplicate-slug
        error so it cannot silently replace the first in the catalog.
        """
        results: List[LintResult] = []
        seen_slugs: dict[str, str] = {}

        for raw in documents:
            result = lint_raw(raw)

            if result.document is not None:
                slug = result.document.slug
                if slug in seen_slugs:
                    result.issues.insert(0, make_issue(
                        "duplicate-slug",
                        f"slug '{slug}' is already used by {seen_slugs[slug]}",
                    ))
                else:
                    seen_slugs[slug] = raw.path

            if self.config.verbose:
                status = "ok" if result.ok else f"{len(result.errors)} error(s)"
                print(f"[lint] {raw.path}: {status}, {len(result.warnings)} warning(s)")

            results.append(result)

        return results

    def _build_guides(self, lint_results: List[LintResult], errors: List[str]) -> List[Guide]:
        """
        Build Guide objects for documents without lint errors.

        Args:
            lint_results: Output of the lint stage.
            errors: Pipeline error list to append conversion failures to.
        """
        guides: List[Guide] = []
        for result in lint_results:
            if not result.ok or result.document is None:
                continue
            try:
                guides.append(Guide.from_document(result.document))
            except ValueError as e:
                errors.append(f"{result.path}: {e}")
        return guides

    def _stale_slugs(self, catalog: Catalog, result: PipelineResult) -> List[str]:
        """
        Slugs to drop from the catalog after this run.

        A run that read every configured source in full replaces the whole
        catalog, so deleted and failing guides disappear. A partial run
        (--limit, --sources or a failed source) only drops the documents
        it read that failed lint.
        """
        complete = (
            self.config.limit is None
            and not self.config.sources
            and result.sources_failed == 0
        )
        if complete:
            return [g.slug for g in catalog.all_guides()]

        return [
            r.document.slug if r.document is not None else slugify_path(r.path)
            for r in result.lint_results
            if not r.ok
        ]

    def _generate_report(self, catalog: Catalog, lint_results: List[LintResult]) -> ReportResult:
        """
        Generate the report.

        Args:
            catalog: Catalog to list guides from.
            lint_results: Results of the lint stage.
        """
        if self.config.verbose:
            print(f"Generating report in {self.config.report_output_dir}...")

        generator = ReportGenerator(catalog, ReportConfig(output_dir=self.config.report_output_dir))
        return generator.generate(lint_results)

    def run(self) -> PipelineResult:
        """
        Execute the full pipeline.

        Returns:
            PipelineResult with execution details.
        """
        result = PipelineResult(
            started_at=datetime.now(),
            dry_run=self.config.dry_run,
            strict=self.config.strict,
        )

        try:
            # Step 1: Get sources
            sources = self._get_registered_sources()
            if self.config.verbose:
                print(f"Initialized {len(sources)} sources: {[s.name for s in sources]}")

            # Step 2: Read from all sources
            documents, source_results = self._fetch_all_documents(sources)
            result.source_results = source_results

            # Step 3: Parse and lint
            result.lint_results = self._lint_documents(documents)

            # Step 4: Catalog passing guides
            result.guides = self._build_guides(result.lint_results, result.errors)
            catalog = self._get_catalog()
            result.catalog = catalog

            if self.config.verbose:
                print(f"Storing {len(result.guides)} guides to {catalog.name}...")
            stale = self._stale_slugs(catalog, result)
            result.upsert_result = catalog.upsert_guides(result.guides, remove=stale)
            result.errors.extend(result.upsert_result.errors)

            # Step 5: Report (unless dry-run or skip_report)
            if not self.config.dry_run and not self.config.skip_report:
                report_result = self._generate_report(catalog, result.lint_results)
                result.report_result = report_result
                if not report_result.success:
                    result.errors.append(f"Report error: {report_result.error}")

        except Exception as e:
            result.errors.append(f"Pipeline error: {str(e)}")
            if self.config.verbose:
                result.errors.append(traceback.format_exc())

        result.finished_at = datetime.now()
        return result


# =============================================================================
# Convenience Functions
# =============================================================================

def run_pipeline(
    content_dir: str = None,
    remote_urls: List[str] = None,
    sources: List[str] = None,
    strict: bool = False,
    dry_run: bool = False,
    verbose: bool = False,
    skip_report: bool = False,
    report_output_dir: str = None,
    catalog_path: str = None,
) -> PipelineResult:
    """
    Run the pipeline with specified options.

    Convenience function for programmatic use.

    Args:
        content_dir: Local content directory (default: config value).
        remote_urls: Remote guide URLs (default: config value).
        sources: Source names to use (None = default selection).
        strict: If True, warnings fail the run.
        dry_run: If True, skip catalog persistence and report.
        verbose: If True, print detailed progress.
        skip_report: If True, skip report generation.
        report_output_dir: Report directory (default: config value).
        catalog_path: Catalog file (default: config value).

    Returns:
        PipelineResult with execution details.
    """
    config = PipelineConfig(
        sources=sources,
        strict=strict,
        dry_run=dry_run,
        verbose=verbose,
        skip_report=skip_report,
    )
    if content_dir is not None:
        config.content_dir = content_dir
    if remote_urls is not None:
        config.remote_urls = list(remote_urls)
    if report_output_dir is not None:
        config.report_output_dir = report_output_dir
    if catalog_path is not None:
        config.catalog_path = catalog_path

    pipeline = GuidebookPipeline(config)
    return pipeline.run()
