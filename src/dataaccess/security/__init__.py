"""Security helpers for dataaccess."""

from .dsns import build_url, dsn_password, redact_dsn
from .redaction import REDACTED_VALUE, sanitize_error_message

__all__ = ["REDACTED_VALUE", "build_url", "dsn_password", "redact_dsn", "sanitize_error_message"]
