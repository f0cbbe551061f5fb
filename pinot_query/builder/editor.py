"""
Editing transitions for the visual query.

Each function takes the current ``VisualQuery`` and returns a new one; the
input is never modified, so callers can keep old values for undo/redo and
detect changes by equality.
"""
from __future__ import annotations

from typing import Iterable

from pinot_query.builder.model import (
    AggregationConfig,
    FilterCondition,
    OrderByConfig,
    TimeSeriesConfig,
    VisualQuery,
    WILDCARD,
)

_TIME_TYPE_MARKERS = ("TIMESTAMP", "TIME", "LONG", "DATE")


def with_table(query: VisualQuery, table: str) -> VisualQuery:
    """Switch tables; table-specific selections are reset, limit and time-series kept."""
    return query.model_copy(update={
        "table": table,
        "columns": [],
        "filters": [],
        "aggregations": [],
        "group_by": [],
        "order_by": [],
    })


def with_columns(query: VisualQuery, columns: list[str]) -> VisualQuery:
    return query.model_copy(update={"columns": list(columns)})


def with_group_by(query: VisualQuery, columns: list[str]) -> VisualQuery:
    return query.model_copy(update={"group_by": list(columns)})


def with_limit(query: VisualQuery, limit: int | None) -> VisualQuery:
    # Route through validation so the limit is normalised like any other input
    return VisualQuery.model_validate({**query.model_dump(), "limit": limit})


# ── Time-series settings ─────────────────────────────────

def with_time_series_enabled(query: VisualQuery, enabled: bool) -> VisualQuery:
    current = query.time_series or TimeSeriesConfig()
    if enabled:
        auto = current.auto_apply_time_filter if query.time_series is not None else True
        ts = TimeSeriesConfig(
            enabled=True, time_column=current.time_column, auto_apply_time_filter=auto,
        )
    else:
        ts = TimeSeriesConfig(enabled=False, time_column=None, auto_apply_time_filter=False)
    return query.model_copy(update={"time_series": ts})


def with_time_column(query: VisualQuery, column: str | None) -> VisualQuery:
    """Choosing a time column turns time-series mode on."""
    auto = query.time_series.auto_apply_time_filter if query.time_series is not None else True
    ts = TimeSeriesConfig(enabled=True, time_column=column, auto_apply_time_filter=auto)
    return query.model_copy(update={"time_series": ts})


def with_auto_time_filter(query: VisualQuery, enabled: bool) -> VisualQuery:
    current = query.time_series or TimeSeriesConfig()
    ts = current.model_copy(update={"auto_apply_time_filter": enabled})
    return query.model_copy(update={"time_series": ts})


def time_column_candidates(columns: Iterable[tuple[str, str]]) -> list[str]:
    """Names of the columns whose type can hold a timestamp, in input order."""
    return [
        name for name, col_type in columns
        if any(marker in (col_type or "").upper() for marker in _TIME_TYPE_MARKERS)
    ]


# ── List entries ─────────────────────────────────────────

def add_filter(query: VisualQuery) -> VisualQuery:
    return query.model_copy(update={"filters": [*query.filters, FilterCondition()]})


def add_aggregation(query: VisualQuery) -> VisualQuery:
    agg = AggregationConfig(func="COUNT", column=WILDCARD)
    return query.model_copy(update={"aggregations": [*query.aggregations, agg]})


def add_order_by(query: VisualQuery) -> VisualQuery:
    return query.model_copy(update={"order_by": [*query.order_by, OrderByConfig()]})


def _without(items: list, index: int) -> list | None:
    if not 0 <= index < len(items):
        return None
    return [item for i, item in enumerate(items) if i != index]


def remove_filter(query: VisualQuery, index: int) -> VisualQuery:
    remaining = _without(query.filters, index)
    return query if remaining is None else query.model_copy(update={"filters": remaining})


def remove_aggregation(query: VisualQuery, index: int) -> VisualQuery:
    remaining = _without(query.aggregations, index)
    return query if remaining is None else query.model_copy(update={"aggregations": remaining})


def remove_order_by(query: VisualQuery, index: int) -> VisualQuery:
    remaining = _without(query.order_by, index)
    return query if remaining is None else query.model_copy(update={"order_by": remaining})
