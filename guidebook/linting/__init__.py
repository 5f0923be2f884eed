"""
Linting module.

Checks guide front matter and Markdown bodies against the schema.
"""

from guidebook.linting.rules import (
    REQUIRED_FIELDS,
    OPTIONAL_FIELDS,
    RULE_SEVERITIES,
    RULE_DESCRIPTIONS,
    SEVERITY_ERROR,
    SEVERITY_WARNING,
    get_rule_severity,
    get_all_rules,
)

from guidebook.linting.linter import (
    LintIssue,
    LintResult,
    make_issue,
    parse_published_at,
    find_unclosed_fence,
    check_required_fields,
    check_field_types,
    check_published_at,
    check_tags,
    check_type,
    check_color,
    check_unknown_fields,
    check_code_fences,
    check_single_front_matter,
    check_body,
    lint_document,
    lint_raw,
    lint_text,
)

__all__ = [
    # Rule catalogue
    "REQUIRED_FIELDS",
    "OPTIONAL_FIELDS",
    "RULE_SEVERITIES",
    "RULE_DESCRIPTIONS",
    "SEVERITY_ERROR",
    "SEVERITY_WARNING",
    "get_rule_severity",
    "get_all_rules",
    # Lint functions
    "LintIssue",
    "LintResult",
    "make_issue",
    "parse_published_at",
    "find_unclosed_fence",
    "check_required_fields",
    "check_field_types",
    "check_published_at",
    "check_tags",
    "check_type",
    "check_color",
    "check_unknown_fields",
    "check_code_fences",
    "check_single_front_matter",
    "check_body",
    "lint_document",
    "lint_raw",
    "lint_text",
]
