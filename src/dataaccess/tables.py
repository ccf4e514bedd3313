"""
Column filtering against caller-supplied table definitions.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from .errors import ConfigurationError


def strip_missing_columns(
    tables_definition: Mapping[str, Iterable[str]],
    table: str,
    data: Mapping[str, Any],
) -> dict[str, Any]:
    """
    Return a copy of ``data`` holding only the columns defined for ``table``.

    Raises :class:`ConfigurationError` when ``table`` has no definition at all;
    a table defined with no columns strips everything.
    """

    try:
        allowed = tables_definition[table]
    except KeyError as exc:
        raise ConfigurationError(
            f"Table '{table}' is not defined in your tables definition"
        ) from exc
    if isinstance(allowed, str):
        allowed = (allowed,)
    allowed = set(allowed)
    return {column: value for column, value in data.items() if column in allowed}
