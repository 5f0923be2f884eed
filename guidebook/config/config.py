"""
Configuration module for Guidebook.

Loads environment variables from .env file and exposes them as typed configuration values.
Uses python-dotenv for loading and provides safe defaults where appropriate.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file from project root
# The .env file should be in the root directory (parent of guidebook/)
_project_root = Path(__file__).parent.parent.parent
_env_path = _project_root / ".env"
load_dotenv(_env_path)


def _split_list(value: str) -> list[str]:
    """Split a comma-separated env value into a list of non-empty strings."""
    return [part.strip() for part in value.split(",") if part.strip()]


# =============================================================================
# Application Environment
# =============================================================================

# Application environment: "development", "staging", or "production"
APP_ENV: str = os.getenv("APP_ENV", "development")

# Enable debug mode for verbose output
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"


# =============================================================================
# Content Sources
# =============================================================================

# Directory holding the guide Markdown files
CONTENT_DIR: str = os.getenv("CONTENT_DIR", "content")

# Glob pattern (relative to CONTENT_DIR) selecting guide files
CONTENT_GLOB: str = os.getenv("CONTENT_GLOB", "**/*.md")

# Raw Markdown URLs fetched by the remote source (comma-separated)
REMOTE_GUIDE_URLS: list[str] = _split_list(os.getenv("REMOTE_GUIDE_URLS", ""))

# HTTP request timeout in seconds
REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "30"))


# =============================================================================
# Outputs
# =============================================================================

# Directory where dated lint/catalog reports are written
REPORT_OUTPUT_DIR: str = os.getenv("REPORT_OUTPUT_DIR", "reports")

# JSON catalog file; empty string keeps the catalog in memory only
CATALOG_PATH: str = os.getenv("CATALOG_PATH", "catalog.json")


# =============================================================================
# Linting
# =============================================================================

# Accepted values for the front-matter "type" field
ALLOWED_TYPES: list[str] = _split_list(
    os.getenv("ALLOWED_TYPES", "Guide,Tutorial,Reference,Checklist,Cheatsheet")
)

# Treat warnings as failures
STRICT_MODE: bool = os.getenv("STRICT_MODE", "false").lower() == "true"


# =============================================================================
# Helper Functions
# =============================================================================

def is_production() -> bool:
    """Check if running in production environment."""
    return APP_ENV == "production"


def is_development() -> bool:
    """Check if running in development environment."""
    return APP_ENV == "development"


def validate_config() -> list[str]:
    """
    Validate configuration values.
    
    Returns:
        List of missing or invalid configuration keys (empty if all valid).
    """
    errors = []
    
    if not CONTENT_DIR and not REMOTE_GUIDE_URLS:
        errors.append("CONTENT_DIR or REMOTE_GUIDE_URLS must be set")
    
    if CONTENT_DIR and not Path(CONTENT_DIR).is_dir():
        errors.append(f"CONTENT_DIR does not exist: {CONTENT_DIR}")
    
    for url in REMOTE_GUIDE_URLS:
        if not (url.startswith("http://") or url.startswith("https://")):
            errors.append(f"REMOTE_GUIDE_URLS entry must be an http(s) URL: {url}")
    
    if REQUEST_TIMEOUT < 1:
        errors.append("REQUEST_TIMEOUT must be at least 1 second")
    
    if not ALLOWED_TYPES:
        errors.append("ALLOWED_TYPES cannot be empty")
    
    if is_production() and not CATALOG_PATH:
        errors.append("CATALOG_PATH is required in production")
    
    return errors


def print_config_summary() -> None:
    """Print a summary of current configuration."""
    print(f"  APP_ENV: {APP_ENV}")
    print(f"  DEBUG: {DEBUG}")
    print(f"  CONTENT_DIR: {CONTENT_DIR}")
    print(f"  CONTENT_GLOB: {CONTENT_GLOB}")
    print(f"  REMOTE_GUIDE_URLS: {len(REMOTE_GUIDE_URLS)} configured")
    print(f"  REQUEST_TIMEOUT: {REQUEST_TIMEOUT}s")
    print(f"  REPORT_OUTPUT_DIR: {REPORT_OUTPUT_DIR}")
    print(f"  CATALOG_PATH: {CATALOG_PATH or '(in-memory)'}")
    print(f"  ALLOWED_TYPES: {', '.join(ALLOWED_TYPES)}")
    print(f"  STRICT_MODE: {STRICT_MODE}")
