"""DSN parsing and redaction utilities."""

from __future__ import annotations

from typing import Optional

from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import ArgumentError

from .redaction import redact_query_params, scrub_url_credentials


def build_url(dsn: str, username: Optional[str] = None, password: Optional[str] = None) -> URL:
    """
    Parse ``dsn`` and overlay non-empty credentials supplied separately.
    """

    url = make_url(dsn)
    overrides = {}
    if username:
        overrides["username"] = username
    if password:
        overrides["password"] = password
    if overrides:
        url = url.set(**overrides)
    return url


def dsn_password(dsn: str) -> Optional[str]:
    try:
        return make_url(dsn).password
    except ArgumentError:
        return None


def redact_dsn(dsn: str) -> str:
    """
    Return the DSN with credentials redacted but structure preserved.
    """

    try:
        url = make_url(dsn)
    except ArgumentError:
        return scrub_url_credentials(dsn)
    if url.query:
        url = url.set(query=redact_query_params(dict(url.query)))
    return url.render_as_string(hide_password=True)
