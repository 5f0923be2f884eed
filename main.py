#!/usr/bin/env python3
"""
Guidebook - Front-matter linting and cataloguing for Markdown guides.

Command-line entry point for running the full pipeline:
  - Read guide files from the content directory (and remote URLs)
  - Parse YAML front matter and lint every document
  - Store valid guides in the catalog
  - Write a dated report and print an execution summary

Usage:
    python main.py                      # Lint, catalog and report
    python main.py --dry-run            # Lint only, no catalog/report writes
    python main.py --strict             # Warnings fail the run
    python main.py --list --tag docker  # List catalogued guides by tag

Examples:
    # CI check of the content directory
    python main.py --dry-run --strict --quiet

    # Browse guides in a category as JSON
    python main.py --list --category Security --format json
"""

import argparse
import contextlib
import json
import sys

from guidebook import __version__
from guidebook.pipeline import (
    GuidebookPipeline,
    PipelineConfig,
    PipelineResult,
)
from guidebook.config import (
    CONTENT_DIR,
    REPORT_OUTPUT_DIR,
    print_config_summary,
    validate_config,
)


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="guidebook",
        description="Lint, catalog and report on Markdown guides with YAML front matter.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                               Lint, catalog and report with defaults
  %(prog)s --dry-run                     Lint only, skip catalog and report writes
  %(prog)s --strict                      Treat warnings as failures
  %(prog)s --content-dir docs/guides     Read guides from another directory
  %(prog)s --url https://host/guide.md   Also lint a remote guide
  %(prog)s --list --tag docker --tag aws List guides tagged docker or aws
  %(prog)s --list --category Security    List guides in a category
  %(prog)s -v --dry-run                  Verbose dry-run
        """,
    )

    # Core options
    parser.add_argument(
        "--content-dir", "-c",
        default=None,
        metavar="DIR",
        help=f"Directory containing guide files (default: {CONTENT_DIR})",
    )

    parser.add_argument(
        "--sources",
        nargs="+",
        choices=["local", "remote"],
        metavar="SOURCE",
        help="Only read from specific sources: local, remote (default: local, plus remote if URLs are set)",
    )

    parser.add_argument(
        "--url",
        dest="urls",
        action="append",
        metavar="URL",
        help="Remote guide URL to lint (repeatable; overrides REMOTE_GUIDE_URLS)",
    )

    parser.add_argument(
        "--limit", "-l",
        type=int,
        default=None,
        metavar="N",
        help="Maximum documents to read per source (default: all)",
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat lint warnings as failures",
    )

    parser.add_argument(
        "--dry-run", "-n",
        action="store_true",
        help="Lint only; do not write the catalog or the report",
    )

    # Report options
    parser.add_argument(
        "--report-dir",
        default=None,
        metavar="DIR",
        help=f"Directory for dated reports (default: {REPORT_OUTPUT_DIR})",
    )

    parser.add_argument(
        "--skip-report",
        action="store_true",
        help="Skip report generation",
    )

    # Listing options
    parser.add_argument(
        "--list",
        action="store_true",
        help="List catalogued guides instead of the lint summary",
    )

    parser.add_argument(
        "--tag", "-t",
        dest="tags",
        action="append",
        metavar="TAG",
        help="With --list: only guides carrying this tag (repeatable)",
    )

    parser.add_argument(
        "--match-all",
        action="store_true",
        help="With --list and several --tag: require every tag instead of any",
    )

    parser.add_argument(
        "--category",
        default=None,
        help="With --list: only guides in this category",
    )

    parser.add_argument(
        "--type",
        dest="doc_type",
        default=None,
        help="With --list: only guides of this type (e.g. Guide)",
    )

    parser.add_argument(
        "--format", "-f",
        dest="output_format",
        choices=["text", "json"],
        default="text",
        help="With --list: output format (default: text)",
    )

    # Output options
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show detailed progress and debug info",
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only show errors and final summary",
    )

    # Info options
    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Show current configuration and exit",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def show_config() -> None:
    """Display current configuration."""
    print("=" * 60)
    print("Guidebook Configuration")
    print("=" * 60)
    print_config_summary()

    errors = validate_config()
    if errors:
        print("\nConfiguration warnings:")
        for error in errors:
            print(f"  ⚠️  {error}")
    else:
        print("\n✓ Configuration valid")
    print("=" * 60)


def print_guide_list(result: PipelineResult, args) -> None:
    """Print catalogued guides matching the listing filters."""
    guides = []
    if result.catalog is not None:
        guides = result.catalog.filter_guides(
            tags=args.tags,
            category=args.category,
            type=args.doc_type,
            match_all=args.match_all,
        )

    if args.output_format == "json":
        payload = [
            {"slug": g.slug, **g.to_front_matter(), "path": g.path}
            for g in guides
        ]
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    if not guides:
        print("No guides match the given filters.")
        return

    for guide in guides:
        icon = f"{guide.icon} " if guide.icon else ""
        print(f"{icon}{guide.title}  [{guide.category} / {guide.type}]  {guide.published_at.isoformat()}")
        print(f"    {guide.slug}  tags: {', '.join(guide.tags)}")
    print(f"\n{len(guides)} guide(s)")


def print_result_summary(result: PipelineResult, verbose: bool = False) -> None:
    """Print the pipeline result summary."""
    print(result.to_summary())

    if verbose and result.guides:
        print("\nCatalogued guides:")
        for guide in result.guides:
            print(f"  {guide}")


def main(argv: list = None) -> int:
    """
    Main entry point.

    Args:
        argv: Command-line arguments (default: sys.argv[1:]).

    Returns:
        Exit code (0 = all documents passed, 1 = lint failures or error).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    # Handle --show-config
    if args.show_config:
        show_config()
        return 0

    listing = args.list
    json_output = listing and args.output_format == "json"
    quiet = args.quiet or json_output
    # Stdout carries only the JSON array when listing as JSON
    status_out = sys.stderr if json_output else sys.stdout

    # Print header (unless quiet)
    if not quiet:
        print("=" * 60)
        print("Guidebook Pipeline")
        print("=" * 60)

        if args.dry_run:
            print("Mode: DRY RUN (no catalog or report writes)")

        if args.verbose:
            print("\nConfiguration:")
            print_config_summary()
            print()

    # Create pipeline config from CLI args
    config = PipelineConfig.from_args(args)
    if listing:
        # Listing reads the corpus but never writes a report
        config.skip_report = True

    # Show effective settings
    if not quiet:
        print("Settings:")
        print(f"  Content dir: {config.content_dir}")
        print(f"  Sources: {config.sources or 'default'}")
        print(f"  Remote URLs: {len(config.remote_urls)}")
        print(f"  Strict: {config.strict}")
        print(f"  Dry run: {config.dry_run}")
        print(f"  Report dir: {config.report_output_dir}")
        print(f"  Skip report: {config.skip_report}")
        print()

    # Run the pipeline
    try:
        pipeline = GuidebookPipeline(config)
        # Source progress goes to stderr when stdout carries JSON
        progress = contextlib.redirect_stdout(sys.stderr) if json_output else contextlib.nullcontext()
        with progress:
            result = pipeline.run()

        if listing:
            print_guide_list(result, args)
        elif not args.quiet:
            print_result_summary(result, args.verbose)

        if result.errors:
            if args.quiet:
                for error in result.errors:
                    print(f"❌ {error}", file=sys.stderr)
            return 1

        if result.sources_failed > 0 and result.sources_succeeded == 0:
            # All sources failed
            return 1

        if result.documents_failed > 0:
            if args.quiet:
                print(
                    f"❌ {result.documents_failed} of {result.total_documents} documents failed linting",
                    file=status_out,
                )
            return 1

        return 0

    except KeyboardInterrupt:
        print("\n\nInterrupted by user", file=status_out)
        return 130
    except Exception as e:
        print(f"\n❌ Pipeline error: {e}", file=status_out)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
