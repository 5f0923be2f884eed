"""
Test Configuration - Externalized Test Data

This file contains all configurable test data, expected values, and test parameters.
Update values here when requirements change - no need to modify test scripts.

Structure:
- CONFIG: General test configuration
- EXPECTED: Expected values for validation tests
- TEST_DATA: Test input data (sample documents, guides, etc.)
- MESSAGES: Expected error messages and outputs
"""

from datetime import date
from typing import List, Any


# =============================================================================
# GENERAL TEST CONFIGURATION
# =============================================================================

CONFIG = {
    # Environment settings for tests
    "environments": {
        "production": "production",
        "development": "development",
        "staging": "staging",
    },

    # Fixed "today" so future-date checks are deterministic
    "today": date(2024, 6, 1),

    # Directories
    "test_output_dir": "test_results",
    "report_output_dir": "reports",
    "content_dir": "content",

    # Sources available in the system
    "available_sources": ["local", "remote"],

    # Document types accepted in tests
    "allowed_types": ["Guide", "Tutorial", "Reference"],
}


# =============================================================================
# EXPECTED VALUES FOR VALIDATION
# =============================================================================

EXPECTED = {
    # Configuration validation
    "config": {
        "default_timeout_range": (5, 120),  # min, max seconds
        "default_content_dir": "content",
        "default_types": ["Guide", "Tutorial", "Reference", "Checklist", "Cheatsheet"],
    },

    # Front-matter schema
    "schema": {
        "required_fields": ["title", "description", "type", "category", "tags", "publishedAt"],
        "optional_fields": ["icon", "color"],
    },

    # Report expectations
    "report": {
        "filename_pattern": r"\d{4}-\d{2}-\d{2}\.md$",  # YYYY-MM-DD.md
        "required_sections": ["## Summary", "## Lint Results", "## Catalog", "## Tags"],
    },

    # CLI expectations
    "cli": {
        "exit_code_success": 0,
        "exit_code_failure": 1,
        "exit_code_argparse_error": 2,
        "exit_code_interrupted": 130,
    },

    # Shipped content corpus
    "corpus": {
        "slugs": ["aws-s3-security", "docker-container-security"],
        "category": "Security",
    },
}


# =============================================================================
# TEST DATA - SAMPLE DOCUMENTS AND GUIDES
# =============================================================================

VALID_DOCUMENT = """---
title: Docker Container Security
description: Hardening containers from build to runtime.
type: Guide
category: Security
tags:
  - docker
  - containers
icon: "🐳"
color: "#2496ED"
publishedAt: 2024-03-12
---

# Docker Container Security

Run containers as a non-root user.

```bash
docker run --cap-drop ALL myapp
```
"""

TEST_DATA = {
    # Raw guide files used by parser, linter and pipeline tests
    "documents": {
        "valid": VALID_DOCUMENT,

        "missing_fields": """---
title: Half Written
tags:
  - draft
---

# Half Written
""",

        "no_front_matter": """# Just Markdown

No metadata here.
""",

        "unterminated": """---
title: Never Closed
description: The closing delimiter is missing
""",

        "bad_yaml": """---
title: Broken
tags: [docker, containers
---

# Broken
""",

        "scalar_front_matter": """---
just a string
---

# Body
""",

        "invalid_date": """---
title: Bad Date
description: publishedAt is not a real day
type: Guide
category: Security
tags: [dates]
publishedAt: "2024-02-30"
---

# Bad Date
""",

        "datetime_published": """---
title: With Time
description: publishedAt carries a time part
type: Guide
category: Security
tags: [dates]
publishedAt: 2024-03-12T09:30:00Z
---

# With Time
""",

        "unclosed_fence": """---
title: Open Fence
description: A code block that never ends
type: Guide
category: Security
tags: [fences]
publishedAt: 2024-01-05
---

# Open Fence

Intro paragraph.

```bash
echo "never closed"
""",

        "bad_tags": """---
title: Bad Tags
description: tags is a string instead of a list
type: Guide
category: Security
tags: docker
publishedAt: 2024-01-05
---

# Bad Tags
""",

        "warnings_only": """---
title: Warnings Only
description: Lints with warnings but no errors
type: Whitepaper
category: Security
tags:
  - Docker
  - docker
color: blue
author: someone
publishedAt: 2024-01-05
---

Body without any heading.
""",

        "double_front_matter": """---
title: Twice
description: A second metadata block follows
type: Guide
category: Security
tags: [twice]
publishedAt: 2024-01-05
---
---
title: Again
---

# Twice
""",

        "empty_body": """---
title: Empty
description: Nothing after the front matter
type: Guide
category: Security
tags: [empty]
publishedAt: 2024-01-05
---
""",
    },

    # Sample Guide data for model, catalog and report tests
    "sample_guides": [
        {
            "slug": "docker-container-security",
            "title": "Docker Container Security",
            "description": "Hardening containers from build to runtime.",
            "type": "Guide",
            "category": "Security",
            "tags": ["docker", "containers", "hardening"],
            "published_at": date(2024, 3, 12),
            "icon": "🐳",
            "color": "#2496ED",
            "body": "# Docker Container Security\n\nRun containers as a non-root user.\n",
        },
        {
            "slug": "aws-s3-security",
            "title": "AWS S3 Security",
            "description": "Locking down buckets with policies and encryption.",
            "type": "Guide",
            "category": "Security",
            "tags": ["aws", "s3", "cloud"],
            "published_at": date(2024, 4, 2),
            "body": "# AWS S3 Security\n\nEnable Block Public Access on every bucket.\n",
        },
        {
            "slug": "kubernetes-basics",
            "title": "Kubernetes Basics",
            "description": "Pods, deployments and services in one afternoon.",
            "type": "Tutorial",
            "category": "Operations",
            "tags": ["kubernetes", "containers"],
            "published_at": date(2023, 11, 20),
            "body": "# Kubernetes Basics\n\nA pod wraps one or more containers.\n",
        },
    ],
}


# =============================================================================
# ERROR MESSAGES - Expected messages for validation
# =============================================================================

MESSAGES = {
    # Configuration error messages (substrings to check)
    "config_errors": {
        "no_sources": "CONTENT_DIR or REMOTE_GUIDE_URLS",
        "missing_dir": "CONTENT_DIR does not exist",
        "bad_url": "http(s) URL",
        "bad_timeout": "REQUEST_TIMEOUT",
        "no_types": "ALLOWED_TYPES",
        "production_catalog": "CATALOG_PATH",
    },

    # Parser error messages (substrings)
    "parse_errors": {
        "missing": "missing front matter",
        "unterminated": "unterminated front matter",
        "invalid_yaml": "invalid YAML",
        "not_mapping": "non-empty mapping",
    },

    # CLI help text (substrings that should appear)
    "cli_help": {
        "dry_run": "--dry-run",
        "strict": "--strict",
        "sources": "--sources",
        "verbose": "--verbose",
        "list": "--list",
    },

    # Pipeline summary (substrings)
    "pipeline_summary": {
        "header": "SUMMARY",
        "sources_label": "Sources",
        "duration_label": "Duration",
        "result_passed": "Result: PASSED",
        "result_failed": "Result: FAILED",
    },
}


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def get_document(name: str) -> str:
    """Get a sample raw document by name."""
    return TEST_DATA["documents"][name]


def get_sample_guide(index: int = 0) -> dict:
    """Get sample guide data by index."""
    guides = TEST_DATA["sample_guides"]
    return dict(guides[index % len(guides)])


def get_all_sample_guides() -> List[dict]:
    """Get all sample guide data."""
    return [dict(g) for g in TEST_DATA["sample_guides"]]


def get_expected_value(category: str, key: str) -> Any:
    """Get an expected value from the EXPECTED config."""
    return EXPECTED.get(category, {}).get(key)


# =============================================================================
# TEST CATEGORIES METADATA
# =============================================================================

TEST_CATEGORIES = {
    "config_validation": {
        "name": "Configuration Validation",
        "description": "Validates environment configuration and error handling",
        "protects_against": [
            "Silent failures from missing configuration",
            "Invalid configuration values being accepted",
        ],
    },
    "frontmatter": {
        "name": "Front-matter Parsing",
        "description": "Validates splitting and YAML parsing of guide files",
        "protects_against": [
            "Malformed metadata crashing the pipeline",
            "Wrong line numbers in error messages",
        ],
    },
    "linting": {
        "name": "Linting Rules",
        "description": "Validates every lint rule and its severity",
        "protects_against": [
            "Invalid guides reaching the catalog",
            "Unbalanced code fences going unnoticed",
        ],
    },
    "catalog": {
        "name": "Catalog",
        "description": "Validates storage, filtering and search",
        "protects_against": [
            "Duplicate records across runs",
            "Incorrect tag and category filtering",
        ],
    },
    "report": {
        "name": "Report Correctness",
        "description": "Validates report output format and ordering",
        "protects_against": [
            "Missing report sections",
            "Non-deterministic output",
        ],
    },
    "pipeline": {
        "name": "Pipeline Orchestration",
        "description": "Validates execution order and dry-run behavior",
        "protects_against": [
            "Catalog writes during dry-run",
            "One failing source stopping the run",
        ],
    },
    "system_cli_behavior": {
        "name": "CLI Behavior",
        "description": "Validates command-line interface correctness",
        "protects_against": [
            "CLI flags not being honored",
            "Wrong exit codes for CI",
        ],
    },
    "system_content_corpus": {
        "name": "Content Corpus",
        "description": "Lints the guides shipped in content/",
        "protects_against": [
            "Publishing guides with broken front matter",
        ],
    },
    "web_app": {
        "name": "Web Dashboard",
        "description": "Validates dashboard pages and JSON API",
        "protects_against": [
            "Broken routes",
            "Unvalidated input reaching the filesystem",
        ],
    },
}
