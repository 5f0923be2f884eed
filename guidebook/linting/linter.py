"""
Linting logic for Guidebook.

Provides pure, side-effect-free functions to check a parsed guide against
the front-matter schema and the Markdown body conventions:

1. Front matter: required fields, field types, publishedAt, tags, type, color
2. Body: balanced code fences, a single front-matter block, content, headings

All functions are deterministic and do not mutate input data.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

from guidebook.config import ALLOWED_TYPES
from guidebook.models.guide import RawDocument
from guidebook.parsing.frontmatter import (
    FM_BOUNDARY,
    FrontMatterError,
    ParsedDocument,
    parse_document,
    split_front_matter,
)
from guidebook.linting.rules import (
    DATE_PATTERN,
    FENCE_PATTERN,
    HEADING_PATTERN,
    HEX_COLOR_PATTERN,
    KNOWN_FIELDS,
    REQUIRED_FIELDS,
    SEVERITY_ERROR,
    SEVERITY_WARNING,
    STRING_FIELDS,
    get_rule_severity,
)


# =============================================================================
# Result Data Structures
# =============================================================================

@dataclass
class LintIssue:
    """
    A single problem found in a guide.

    Attributes:
        rule: Rule name from the rule catalogue (e.g., "code-fence").
        severity: "error" or "warning".
        message: Human-readable description.
        line: 1-based file line number, if known.
    """
    rule: str
    severity: str
    message: str
    line: Optional[int] = None

    @property
    def is_error(self) -> bool:
        return self.severity == SEVERITY_ERROR

    def to_dict(self) -> dict:
        return {
            "rule": self.rule,
            "severity": self.severity,
            "message": self.message,
            "line": self.line,
        }

    def __str__(self) -> str:
        location = f"line {self.line}" if self.line else "-"
        return f"{location}: {self.severity} [{self.rule}] {self.message}"


@dataclass
class LintResult:
    """
    Result of linting one document.

    Attributes:
        path: Display path of the document.
        issues: Issues found, sorted by line then rule.
        document: The parsed document (None if parsing failed).
    """
    path: str
    issues: list[LintIssue] = field(default_factory=list)
    document: Optional[ParsedDocument] = None

    @property
    def errors(self) -> list[LintIssue]:
        return [i for i in self.issues if i.severity == SEVERITY_ERROR]

    @property
    def warnings(self) -> list[LintIssue]:
        return [i for i in self.issues if i.severity == SEVERITY_WARNING]

    @property
    def ok(self) -> bool:
        """True when the document has no errors."""
        return not self.errors

    def passed(self, strict: bool = False) -> bool:
        """True when the document has no errors (and no warnings if strict)."""
        if strict:
            return not self.issues
        return self.ok

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "ok": self.ok,
            "errors": len(self.errors),
            "warnings": len(self.warnings),
            "issues": [i.to_dict() for i in self.issues],
        }


def make_issue(rule: str, message: str, line: Optional[int] = None) -> LintIssue:
    """Build an issue at the severity the rule catalogue assigns."""
    return LintIssue(rule=rule, severity=get_rule_severity(rule), message=message, line=line)


def _sort_issues(issues: list[LintIssue]) -> list[LintIssue]:
    # Issues without a line (document-level) come first
    return sorted(issues, key=lambda i: (i.line or 0, i.rule, i.message))


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


# =============================================================================
# Front-matter Checks
# =============================================================================

def parse_published_at(value: Any) -> Optional[date]:
    """
    Interpret a publishedAt value as a calendar date.

    Accepts YAML dates and datetimes, and strings shaped ``YYYY-MM-DD``
    optionally followed by a time part.

    Returns:
        The date, or None if the value is not a valid calendar date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    match = DATE_PATTERN.match(value.strip())
    if not match:
        return None

    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def check_required_fields(document: ParsedDocument) -> list[LintIssue]:
    """Every required field is present with a non-empty value."""
    issues = []
    meta = document.metadata
    for name in REQUIRED_FIELDS:
        if name not in meta:
            issues.append(make_issue("required-field", f"missing required field '{name}'"))
        elif _is_blank(meta[name]):
            issues.append(make_issue(
                "required-field",
                f"required field '{name}' is empty",
                document.field_lines.get(name),
            ))
    return issues


def check_field_types(document: ParsedDocument) -> list[LintIssue]:
    """Text fields hold strings."""
    issues = []
    for name in STRING_FIELDS:
        value = document.metadata.get(name)
        if value is not None and not isinstance(value, str):
            issues.append(make_issue(
                "field-type",
                f"field '{name}' must be a string, got {type(value).__name__}",
                document.field_lines.get(name),
            ))
    return issues


def check_published_at(document: ParsedDocument, today: Optional[date] = None) -> list[LintIssue]:
    """publishedAt is a valid calendar date and not in the future."""
    value = document.metadata.get("publishedAt")
    if _is_blank(value):
        # Reported by check_required_fields
        return []

    line = document.field_lines.get("publishedAt")
    published = parse_published_at(value)
    if published is None:
        return [make_issue(
            "published-at",
            f"publishedAt must be a calendar date (YYYY-MM-DD), got {value!r}",
            line,
        )]

    if today is None:
        today = date.today()
    if published > today:
        return [make_issue(
            "future-date",
            f"publishedAt {published.isoformat()} is in the future",
            line,
        )]
    return []


def check_tags(document: ParsedDocument) -> list[LintIssue]:
    """tags is a non-empty sequence of non-empty strings without duplicates."""
    tags = document.metadata.get("tags")
    if tags is None:
        return []

    line = document.field_lines.get("tags")
    if not isinstance(tags, (list, tuple)):
        return [make_issue("tags", f"tags must be a list of strings, got {type(tags).__name__}", line)]
    if not tags:
        # Reported by check_required_fields
        return []

    issues = []
    seen: set[str] = set()
    for position, tag in enumerate(tags, start=1):
        if not isinstance(tag, str):
            issues.append(make_issue(
                "tags",
                f"tag #{position} must be a string, got {type(tag).__name__}",
                line,
            ))
            continue
        if not tag.strip():
            issues.append(make_issue("tags", f"tag #{position} is empty", line))
            continue
        key = tag.strip().lower()
        if key in seen:
            issues.append(make_issue("duplicate-tag", f"tag '{tag}' is listed more than once", line))
        seen.add(key)
    return issues


def check_type(document: ParsedDocument, allowed_types: Optional[list[str]] = None) -> list[LintIssue]:
    """type is one of the allowed document types."""
    value = document.metadata.get("type")
    if not isinstance(value, str) or not value.strip():
        return []

    if allowed_types is None:
        allowed_types = ALLOWED_TYPES
    if value.strip() not in allowed_types:
        return [make_issue(
            "type",
            f"type '{value}' is not one of: {', '.join(allowed_types)}",
            document.field_lines.get("type"),
        )]
    return []


def check_color(document: ParsedDocument) -> list[LintIssue]:
    """color, when set, is a hex color code."""
    value = document.metadata.get("color")
    if not isinstance(value, str):
        return []
    if not HEX_COLOR_PATTERN.match(value.strip()):
        return [make_issue(
            "color",
            f"color must be a hex code like #1D63ED, got {value!r}",
            document.field_lines.get("color"),
        )]
    return []


def check_unknown_fields(document: ParsedDocument) -> list[LintIssue]:
    """Front matter only uses keys from the schema."""
    issues = []
    for name in document.metadata:
        if name not in KNOWN_FIELDS:
            issues.append(make_issue(
                "unknown-field",
                f"unknown front-matter field '{name}'",
                document.field_lines.get(str(name)),
            ))
    return issues


# =============================================================================
# Body Checks
# =============================================================================

def find_unclosed_fence(body: str) -> Optional[tuple[int, str]]:
    """
    Find a fenced code block that is never closed.

    A fence opens with 3+ backticks or tildes and closes with a fence of
    the same character that is at least as long and carries no info string.

    Args:
        body: Markdown text.

    Returns:
        (0-based line index, opening fence) of the unclosed block, or None.
    """
    open_fence: Optional[tuple[str, int, int, str]] = None

    for index, line in enumerate(body.splitlines()):
        match = FENCE_PATTERN.match(line)
        if not match:
            continue

        fence, info = match.group(1), match.group(2)
        if open_fence is None:
            # A backtick fence's info string cannot itself contain backticks
            if fence[0] == "`" and "`" in info:
                continue
            open_fence = (fence[0], len(fence), index, fence)
        elif fence[0] == open_fence[0] and len(fence) >= open_fence[1] and not info.strip():
            open_fence = None

    if open_fence is None:
        return None
    return open_fence[2], open_fence[3]


def iter_prose_lines(body: str):
    """Yield (index, line) for body lines that sit outside fenced code blocks."""
    open_fence: Optional[tuple[str, int]] = None
    for index, line in enumerate(body.splitlines()):
        match = FENCE_PATTERN.match(line)
        if match:
            fence, info = match.group(1), match.group(2)
            if open_fence is None:
                if not (fence[0] == "`" and "`" in info):
                    open_fence = (fence[0], len(fence))
                    continue
            elif fence[0] == open_fence[0] and len(fence) >= open_fence[1] and not info.strip():
                open_fence = None
                continue
        if open_fence is None:
            yield index, line


def check_code_fences(document: ParsedDocument) -> list[LintIssue]:
    """Every fenced code block has a closing fence."""
    unclosed = find_unclosed_fence(document.body)
    if unclosed is None:
        return []
    index, fence = unclosed
    return [make_issue(
        "code-fence",
        f"code block opened with '{fence}' is never closed",
        document.body_start_line + index,
    )]


def check_single_front_matter(document: ParsedDocument) -> list[LintIssue]:
    """The body must not open with a second front-matter block."""
    lines = document.body.splitlines(keepends=True)
    skipped = 0
    while skipped < len(lines) and not lines[skipped].strip():
        skipped += 1
    if skipped >= len(lines) or not FM_BOUNDARY.match(lines[skipped]):
        return []

    rest = "".join(lines[skipped:])
    try:
        fm_text, _, _ = split_front_matter(rest)
    except FrontMatterError:
        # A lone horizontal rule, not a front-matter block
        return []

    if ":" not in fm_text:
        return []
    return [make_issue(
        "single-front-matter",
        "body starts with a second front-matter block",
        document.body_start_line + skipped,
    )]


def check_body(document: ParsedDocument) -> list[LintIssue]:
    """The body has content and at least one heading outside code blocks."""
    if not document.body.strip():
        return [make_issue("empty-body", "document body is empty", document.body_start_line)]

    for _, line in iter_prose_lines(document.body):
        if HEADING_PATTERN.match(line):
            return []
    return [make_issue("heading", "document body has no headings", document.body_start_line)]


# =============================================================================
# Entry Points
# =============================================================================

def lint_document(
    document: ParsedDocument,
    today: Optional[date] = None,
    allowed_types: Optional[list[str]] = None,
) -> LintResult:
    """
    Run every check against a parsed document.

    This is a pure function - it does not modify the input document.

    Args:
        document: The parsed guide.
        today: Reference date for the future-date check (default: today).
        allowed_types: Accepted "type" values (default: config ALLOWED_TYPES).

    Returns:
        LintResult with issues sorted by line then rule.
    """
    issues: list[LintIssue] = []
    issues.extend(check_required_fields(document))
    issues.extend(check_field_types(document))
    issues.extend(check_published_at(document, today=today))
    issues.extend(check_tags(document))
    issues.extend(check_type(document, allowed_types=allowed_types))
    issues.extend(check_color(document))
    issues.extend(check_unknown_fields(document))
    issues.extend(check_code_fences(document))
    issues.extend(check_single_front_matter(document))
    issues.extend(check_body(document))

    return LintResult(path=document.path, issues=_sort_issues(issues), document=document)


def lint_raw(
    raw: RawDocument,
    today: Optional[date] = None,
    allowed_types: Optional[list[str]] = None,
) -> LintResult:
    """
    Parse and lint a raw document.

    A parse failure is reported as a single "front-matter" error rather
    than raised.
    """
    try:
        document = parse_document(raw)
    except FrontMatterError as e:
        return LintResult(
            path=raw.path,
            issues=[make_issue("front-matter", e.message, e.line)],
        )
    return lint_document(document, today=today, allowed_types=allowed_types)


def lint_text(
    text: str,
    path: str = "<string>",
    today: Optional[date] = None,
    allowed_types: Optional[list[str]] = None,
) -> LintResult:
    """Parse and lint a document given as a string."""
    raw = RawDocument(path=path, text=text, source_name="inline")
    return lint_raw(raw, today=today, allowed_types=allowed_types)
