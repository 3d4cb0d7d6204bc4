"""
Common Logging Utilities

Provides log sanitization for credential redaction.
"""

from src.common.logging.sanitizer import (
    SanitizingFilter,
    configure_sanitized_logging,
)

__all__ = [
    "SanitizingFilter",
    "configure_sanitized_logging",
]
