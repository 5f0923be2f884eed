"""
Guidebook - Web Dashboard

A simple Flask-based dashboard to browse the guide catalog, read reports
and lint documents on demand.

Run with: python -m web.app
Or: cd web && python app.py
"""

import re
import sys
import threading
from pathlib import Path
from dataclasses import dataclass
from typing import Optional

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from flask import Flask, render_template, request, jsonify
from datetime import date, datetime
from guidebook.catalog import Catalog, CatalogError, InMemoryCatalog, JsonFileCatalog
from guidebook.linting import lint_text, RULE_DESCRIPTIONS
from guidebook.pipeline import run_pipeline
from guidebook.rendering import render_guide, render_markdown
from guidebook.config import (
    CATALOG_PATH,
    CONTENT_DIR,
    REPORT_OUTPUT_DIR,
)

app = Flask(__name__)

REPORT_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Cap on documents accepted by /api/lint in one request
MAX_LINT_TEXT_CHARS = 500_000

# Relative config paths resolve against the project root
PROJECT_ROOT = Path(__file__).parent.parent


# =============================================================================
# Pipeline Status Tracking
# =============================================================================

@dataclass
class PipelineStatus:
    """Tracks the status of a pipeline run."""
    running: bool = False
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    status: str = "idle"  # idle, running, completed, failed
    message: str = ""
    result: Optional[dict] = None
    logs: list = None

    def __post_init__(self):
        if self.logs is None:
            self.logs = []

    def log(self, message: str, level: str = "info"):
        """Add a log entry with timestamp."""
        timestamp = datetime.now().strftime("%H:%M:%S")
        self.logs.append({
            "time": timestamp,
            "level": level,  # info, success, warning, error
            "message": message
        })

# Global pipeline status (simple in-memory tracking)
_pipeline_status = PipelineStatus()
_status_lock = threading.Lock()


def project_path(value: str) -> Path:
    """Resolve a configured path the way the CLI does when run from the project root."""
    path = Path(value)
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path


def get_catalog() -> Catalog:
    """Get the catalog written by the last pipeline run."""
    if not CATALOG_PATH:
        return InMemoryCatalog()
    return JsonFileCatalog(str(project_path(CATALOG_PATH)))


def get_reports_dir() -> Path:
    """Directory holding dated reports."""
    return project_path(REPORT_OUTPUT_DIR)


def _guide_summary(guide) -> dict:
    """JSON shape for a guide in listings (no body)."""
    return {
        "slug": guide.slug,
        **guide.to_front_matter(),
        "readingMinutes": guide.reading_minutes,
        "path": guide.path,
        "source": guide.source_name,
    }


# =============================================================================
# Pages
# =============================================================================

@app.route("/")
def index():
    """Main dashboard page."""
    try:
        catalog = get_catalog()
        all_guides = catalog.all_guides()
    except CatalogError as e:
        return render_template("error.html", message=str(e)), 500

    # Get filter parameters
    tag_filter = request.args.get("tag", "all")
    category_filter = request.args.get("category", "all")
    type_filter = request.args.get("type", "all")
    sort_by = request.args.get("sort", "date")

    guides = catalog.filter_guides(
        tags=[tag_filter] if tag_filter != "all" else None,
        category=category_filter if category_filter != "all" else None,
        type=type_filter if type_filter != "all" else None,
    )

    # Sort
    if sort_by == "title":
        guides.sort(key=lambda g: g.title.lower())
    elif sort_by == "category":
        guides.sort(key=lambda g: (g.category.lower(), g.title.lower()))

    return render_template(
        "index.html",
        guides=guides,
        tags=catalog.list_tags(),
        categories=catalog.list_categories(),
        types=catalog.list_types(),
        current_tag=tag_filter,
        current_category=category_filter,
        current_type=type_filter,
        current_sort=sort_by,
        guide_count=len(all_guides),
        pipeline_status=_pipeline_status,
    )


@app.route("/guide/<slug>")
def view_guide(slug):
    """View a single rendered guide."""
    try:
        guide = get_catalog().get_guide(slug)
    except CatalogError as e:
        return render_template("error.html", message=str(e)), 500

    if guide is None:
        return render_template("error.html", message=f"Guide not found: {slug}"), 404

    rendered = render_guide(guide)
    return render_template("guide.html", guide=guide, rendered=rendered)


@app.route("/reports")
def reports():
    """List available report files."""
    reports_dir = get_reports_dir()

    report_files = []
    if reports_dir.exists():
        for f in sorted(reports_dir.glob("*.md"), reverse=True):
            if not REPORT_DATE_PATTERN.match(f.stem):
                continue
            report_files.append({
                "name": f.stem,
                "path": f.name,
                "date": f.stem,
            })

    return render_template("reports.html", reports=report_files)


@app.route("/report/<report_date>")
def view_report(report_date):
    """View a specific report."""
    if not REPORT_DATE_PATTERN.match(report_date):
        return render_template("error.html", message=f"Invalid report date: {report_date}"), 400

    report_path = get_reports_dir() / f"{report_date}.md"
    if not report_path.exists():
        return render_template("error.html", message=f"Report not found: {report_date}"), 404

    content = report_path.read_text(encoding="utf-8")
    return render_template("report.html", date=report_date, content=render_markdown(content))


# =============================================================================
# JSON API
# =============================================================================

@app.errorhandler(CatalogError)
def handle_catalog_error(e):
    return jsonify({"error": str(e)}), 500


@app.route("/api/guides")
def api_guides():
    """List guides, optionally filtered by tag, category and type."""
    tags = request.args.getlist("tag")
    guides = get_catalog().filter_guides(
        tags=tags,
        category=request.args.get("category"),
        type=request.args.get("type"),
        match_all=request.args.get("match") == "all",
    )
    return jsonify({
        "count": len(guides),
        "guides": [_guide_summary(g) for g in guides],
    })


@app.route("/api/guides/<slug>")
def api_guide(slug):
    """Full guide including body, rendered HTML and outline."""
    guide = get_catalog().get_guide(slug)
    if guide is None:
        return jsonify({"error": f"Guide not found: {slug}"}), 404

    rendered = render_guide(guide)
    return jsonify({
        **_guide_summary(guide),
        "body": guide.body,
        "html": rendered.html,
        "outline": [
            {"level": e.level, "text": e.text, "anchor": e.anchor}
            for e in rendered.outline
        ],
    })


@app.route("/api/tags")
def api_tags():
    """Tag -> guide count."""
    return jsonify(get_catalog().list_tags())


@app.route("/api/categories")
def api_categories():
    """Category -> guide count."""
    return jsonify(get_catalog().list_categories())


@app.route("/api/search")
def api_search():
    """Full-text search across the catalog."""
    query = request.args.get("q", "").strip()
    if not query:
        return jsonify({"error": "Query parameter 'q' required"}), 400

    try:
        limit = min(int(request.args.get("limit", 20)), 100)
    except ValueError:
        return jsonify({"error": "limit must be an integer"}), 400

    guides = get_catalog().search_guides(query, limit=limit)
    return jsonify({
        "query": query,
        "count": len(guides),
        "guides": [_guide_summary(g) for g in guides],
    })


@app.route("/api/lint", methods=["POST"])
def api_lint():
    """Lint a document posted as JSON {"text": ..., "path": ...}."""
    data = request.get_json(silent=True)

    if not data or not isinstance(data.get("text"), str):
        return jsonify({"error": "JSON body with a 'text' string required"}), 400

    text = data["text"]
    if len(text) > MAX_LINT_TEXT_CHARS:
        return jsonify({"error": f"Document too large (max {MAX_LINT_TEXT_CHARS} characters)"}), 413

    path = str(data.get("path") or "<posted>")
    result = lint_text(text, path=path, today=date.today())

    response = result.to_dict()
    response["rules"] = {i.rule: RULE_DESCRIPTIONS.get(i.rule, "") for i in result.issues}
    return jsonify(response)


# =============================================================================
# Pipeline Trigger
# =============================================================================

def _run_pipeline_async(strict: bool):
    """Run pipeline in background thread with terminal-style logging."""
    status = _pipeline_status

    try:
        status.status = "running"
        status.log(f"$ guidebook{' --strict' if strict else ''}", "cmd")
        status.log(f"Content dir: {CONTENT_DIR}", "info")
        status.message = "Linting guides..."

        result = run_pipeline(
            content_dir=str(project_path(CONTENT_DIR)) if CONTENT_DIR else None,
            strict=strict,
            report_output_dir=str(get_reports_dir()),
            catalog_path=str(project_path(CATALOG_PATH)) if CATALOG_PATH else "",
        )

        # Log source results
        for sr in result.source_results:
            if sr.success:
                status.log(
                    f"[{sr.source_name}] Read {sr.documents_fetched} documents ({sr.duration_ms:.0f}ms)",
                    "success"
                )
            else:
                status.log(f"[{sr.source_name}] Failed: {sr.error}", "error")

        for lint_result in result.lint_results:
            for issue in lint_result.issues:
                level = "error" if issue.is_error else "warning"
                status.log(f"{lint_result.path}: {issue}", level)

        if result.upsert_result:
            status.log(
                f"Catalog: {result.upsert_result.inserted} inserted, "
                f"{result.upsert_result.updated} updated, "
                f"{result.upsert_result.removed} removed",
                "info"
            )

        if result.report_result and result.report_result.success:
            status.log(f"Generated report: {result.report_result.filename}", "success")

        status.result = {
            "passed": result.passed,
            "sources_succeeded": result.sources_succeeded,
            "sources_failed": result.sources_failed,
            "documents": result.total_documents,
            "documents_passed": result.documents_passed,
            "documents_failed": result.documents_failed,
            "errors": result.total_errors,
            "warnings": result.total_warnings,
            "duration_seconds": result.duration_seconds,
            "pipeline_errors": result.errors[:5],
        }

        status.log(f"Pipeline completed in {result.duration_seconds:.1f}s", "success")
        status.status = "completed"
        status.message = (
            f"{result.documents_passed}/{result.total_documents} documents passed"
        )

    except Exception as e:
        status.log(f"Error: {str(e)}", "error")
        status.status = "failed"
        status.message = f"Pipeline failed: {str(e)}"
        status.result = {"error": str(e)}

    finally:
        status.running = False
        status.finished_at = datetime.now()


@app.route("/api/pipeline/run", methods=["POST"])
def api_pipeline_run():
    """Trigger a pipeline run."""
    global _pipeline_status

    data = request.get_json(silent=True) or {}
    strict = bool(data.get("strict", False))

    with _status_lock:
        # Check if already running
        if _pipeline_status.running:
            return jsonify({
                "success": False,
                "error": "Pipeline is already running",
                "status": _pipeline_status.status,
            }), 409

        _pipeline_status = PipelineStatus(
            running=True,
            started_at=datetime.now(),
            status="starting",
            message="Initializing pipeline...",
        )

    # Start pipeline in background thread
    thread = threading.Thread(target=_run_pipeline_async, args=(strict,))
    thread.daemon = True
    thread.start()

    return jsonify({
        "success": True,
        "message": "Pipeline started",
        "status": "starting",
    })


@app.route("/api/pipeline/status")
def api_pipeline_status():
    """Get current pipeline status."""
    status = _pipeline_status

    response = {
        "running": status.running,
        "status": status.status,
        "message": status.message,
        "logs": status.logs or [],
    }

    if status.started_at:
        response["started_at"] = status.started_at.isoformat()

    if status.finished_at and status.started_at:
        response["finished_at"] = status.finished_at.isoformat()
        response["duration_seconds"] = (
            status.finished_at - status.started_at
        ).total_seconds()

    if status.result:
        response["result"] = status.result

    return jsonify(response)


# =============================================================================
# Template Filters
# =============================================================================

@app.template_filter("severity_class")
def severity_class(severity):
    """Return a CSS class for a lint severity."""
    if severity == "error":
        return "high"
    elif severity == "warning":
        return "medium"
    else:
        return "low"


@app.template_filter("format_date")
def format_date(dt):
    """Format a date or datetime for display."""
    if not dt:
        return "Unknown"
    if isinstance(dt, str):
        return dt
    return dt.strftime("%b %d, %Y")


if __name__ == "__main__":
    print("=" * 50)
    print("Guidebook Dashboard")
    print("=" * 50)
    print("Open http://localhost:5001 in your browser")
    print("Press Ctrl+C to stop")
    print("=" * 50)
    app.run(debug=True, port=5001)
