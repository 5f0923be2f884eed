"""
Lint rule catalogue for Guidebook.

This file is the single source of truth for what a valid guide looks like.
It lists the front-matter schema and every rule the linter applies, with
the severity each rule reports at.

CUSTOMIZATION:

To make a rule stricter or softer:
    1. Change its entry in RULE_SEVERITIES ("error" or "warning")
    2. Errors keep a guide out of the catalog; warnings only fail --strict runs

To extend the schema:
    1. Add the key to REQUIRED_FIELDS or OPTIONAL_FIELDS
    2. Add string-valued keys to STRING_FIELDS
"""

import re

# =============================================================================
# Severities
# =============================================================================

SEVERITY_ERROR: str = "error"
SEVERITY_WARNING: str = "warning"


# =============================================================================
# Front-matter Schema
# =============================================================================

# Keys every guide must define with a non-empty value
REQUIRED_FIELDS: list[str] = [
    "title",
    "description",
    "type",
    "category",
    "tags",
    "publishedAt",
]

# Keys a guide may define
OPTIONAL_FIELDS: list[str] = [
    "icon",
    "color",
]

# Keys whose value must be a string when present
STRING_FIELDS: list[str] = [
    "title",
    "description",
    "type",
    "category",
    "icon",
    "color",
]

KNOWN_FIELDS: set[str] = set(REQUIRED_FIELDS) | set(OPTIONAL_FIELDS)

# publishedAt written as a string; a time part after the date is tolerated
DATE_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})(?:[T ][0-9:.+\-Z]*)?$")

# #RGB or #RRGGBB
HEX_COLOR_PATTERN = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

# Opening/closing code fence: up to 3 spaces indent, then ``` or ~~~ (3+)
FENCE_PATTERN = re.compile(r"^ {0,3}(`{3,}|~{3,})(.*)$")

# ATX heading: up to 3 spaces indent, 1-6 hashes, then space or end of line
HEADING_PATTERN = re.compile(r"^ {0,3}#{1,6}(?:\s|$)")


# =============================================================================
# Rules
# =============================================================================

# Mapping of rule name -> severity
RULE_SEVERITIES: dict[str, str] = {
    "front-matter": SEVERITY_ERROR,
    "required-field": SEVERITY_ERROR,
    "field-type": SEVERITY_ERROR,
    "published-at": SEVERITY_ERROR,
    "tags": SEVERITY_ERROR,
    "duplicate-tag": SEVERITY_WARNING,
    "code-fence": SEVERITY_ERROR,
    "type": SEVERITY_WARNING,
    "color": SEVERITY_WARNING,
    "unknown-field": SEVERITY_WARNING,
    "single-front-matter": SEVERITY_ERROR,
    "empty-body": SEVERITY_ERROR,
    "heading": SEVERITY_WARNING,
    "future-date": SEVERITY_WARNING,
    "duplicate-slug": SEVERITY_ERROR,
}

# One-line explanation per rule (shown by reports and the dashboard)
RULE_DESCRIPTIONS: dict[str, str] = {
    "front-matter": "File starts with one parseable YAML front-matter block",
    "required-field": "Required front-matter fields are present and non-empty",
    "field-type": "Text fields hold strings",
    "published-at": "publishedAt is a valid calendar date",
    "tags": "tags is a non-empty list of non-empty strings",
    "duplicate-tag": "No tag is listed twice",
    "code-fence": "Every fenced code block is closed",
    "type": "type is one of the allowed document types",
    "color": "color is a #RGB or #RRGGBB hex code",
    "unknown-field": "Front matter only uses known fields",
    "single-front-matter": "The body does not start with a second front-matter block",
    "empty-body": "The body has content",
    "heading": "The body has at least one heading",
    "future-date": "publishedAt is not in the future",
    "duplicate-slug": "No two documents share a file name (slug)",
}


def get_rule_severity(rule: str) -> str:
    """
    Get the severity a rule reports at.

    Unknown rules default to "error".
    """
    return RULE_SEVERITIES.get(rule, SEVERITY_ERROR)


def get_all_rules() -> list[str]:
    """Get the list of all rule names."""
    return list(RULE_SEVERITIES.keys())
