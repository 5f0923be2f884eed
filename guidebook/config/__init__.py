"""
Configuration module.

Handles environment variables and application settings.
"""

from guidebook.config.config import (
    APP_ENV,
    DEBUG,
    CONTENT_DIR,
    CONTENT_GLOB,
    REMOTE_GUIDE_URLS,
    REQUEST_TIMEOUT,
    REPORT_OUTPUT_DIR,
    CATALOG_PATH,
    ALLOWED_TYPES,
    STRICT_MODE,
    is_production,
    is_development,
    validate_config,
    print_config_summary,
)

__all__ = [
    "APP_ENV",
    "DEBUG",
    "CONTENT_DIR",
    "CONTENT_GLOB",
    "REMOTE_GUIDE_URLS",
    "REQUEST_TIMEOUT",
    "REPORT_OUTPUT_DIR",
    "CATALOG_PATH",
    "ALLOWED_TYPES",
    "STRICT_MODE",
    "is_production",
    "is_development",
    "validate_config",
    "print_config_summary",
]
