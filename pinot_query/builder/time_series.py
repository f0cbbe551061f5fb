"""
Time-series augmentation pass.

Runs after the base clauses are built and pins the configured time column
into four places: first in SELECT, as a ``$__timeFilter`` macro in WHERE,
first in GROUP BY (aggregated queries only) and as ``<col> ASC`` first in
ORDER BY.  Each injection is a separate function over ``ClauseSet``.
"""
from __future__ import annotations

from dataclasses import replace

from pinot_query.builder.clauses import ClauseSet
from pinot_query.builder.model import TimeSeriesConfig


def time_filter_macro(column: str) -> str:
    """Placeholder expanded to the dashboard time range by the execution layer."""
    return f"$__timeFilter({column})"


def inject_select(clauses: ClauseSet, column: str) -> ClauseSet:
    return replace(clauses, time_column=column)


def inject_where(clauses: ClauseSet, column: str) -> ClauseSet:
    return replace(clauses, where=(time_filter_macro(column),) + clauses.where)


def inject_group_by(clauses: ClauseSet, column: str) -> ClauseSet:
    if not clauses.aggregations or column in clauses.group_by:
        return clauses
    return replace(clauses, group_by=(column,) + clauses.group_by)


def inject_order_by(clauses: ClauseSet, column: str) -> ClauseSet:
    if any(col == column for col, _ in clauses.order_by):
        return clauses
    return replace(clauses, order_by=((column, "ASC"),) + clauses.order_by)


def apply_time_series(clauses: ClauseSet, config: TimeSeriesConfig | None) -> ClauseSet:
    """Apply every time-series injection the config asks for."""
    if config is None or not config.enabled or not config.time_column:
        return clauses

    column = config.time_column
    clauses = inject_select(clauses, column)
    if config.auto_apply_time_filter:
        clauses = inject_where(clauses, column)
    clauses = inject_group_by(clauses, column)
    return inject_order_by(clauses, column)
