"""
Time macro expansion.

Resolves the Grafana-style time macros in a SQL string against a concrete
time range.  Pinot compares timestamps as epoch milliseconds, so both bounds
are substituted as integers.

Supported macros:
  $__timeFrom()  $__timeFromMs  $__timeFrom   -> start of range
  $__timeTo()    $__timeToMs    $__timeTo     -> end of range
  $__timeFilter(col)                          -> col >= <from> AND col < <to>
"""
from __future__ import annotations

import re
from datetime import datetime, timezone

from pinot_query.core.logging import get_logger

logger = get_logger(__name__)

_TIME_FILTER_RE = re.compile(r"\$__timeFilter\(([^)]*)\)")


def to_epoch_ms(moment: datetime) -> int:
    """Epoch milliseconds; naive datetimes are taken as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int(moment.timestamp() * 1000)


def apply_macros(sql: str, time_from: datetime, time_to: datetime) -> str:
    """Replace every time macro in *sql* with literals for the given range.

    Raises
    ------
    ValueError
        If *time_to* is earlier than *time_from*.
    """
    from_ms = to_epoch_ms(time_from)
    to_ms = to_epoch_ms(time_to)
    if to_ms < from_ms:
        raise ValueError(f"Time range end ({time_to}) is before its start ({time_from})")

    # Longest spellings first so the bare names do not eat their suffixes
    for macro in ("$__timeFrom()", "$__timeFromMs", "$__timeFrom"):
        sql = sql.replace(macro, str(from_ms))
    for macro in ("$__timeTo()", "$__timeToMs", "$__timeTo"):
        sql = sql.replace(macro, str(to_ms))

    def _filter(match: re.Match[str]) -> str:
        column = match.group(1).strip()
        return f"{column} >= {from_ms} AND {column} < {to_ms}"

    expanded = _TIME_FILTER_RE.sub(_filter, sql)
    if expanded != sql:
        logger.debug("Expanded time filter macros for range %d..%d", from_ms, to_ms)
    return expanded
