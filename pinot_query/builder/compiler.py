"""
SQL compiler -- turns a VisualQuery into a single Pinot SQL statement.

Compilation is best effort and never raises: an entry that cannot contribute
(a filter without operator, an order-by without column, a missing or
non-positive limit) is left out of its clause instead of failing the whole
statement.  Without a table the result is the empty string.
"""
from __future__ import annotations

import re
from typing import Callable

from pinot_query.builder.clauses import ClauseSet, render_sql
from pinot_query.builder.model import (
    AggregationConfig,
    FilterCondition,
    Operator,
    VisualQuery,
)
from pinot_query.builder.time_series import apply_time_series
from pinot_query.core.logging import get_logger

logger = get_logger(__name__)


# ── Value formatting ─────────────────────────────────────

_NUMERIC_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def is_numeric_literal(text: str) -> bool:
    """True when *text* (already trimmed) can be emitted as an unquoted number.

    Only plain decimal literals qualify.  Unlike JavaScript's ``Number()``,
    hex/octal/binary forms and ``Infinity`` are rejected on purpose: Pinot does
    not read them as numeric literals, so they are quoted as strings instead.
    """
    return bool(text) and _NUMERIC_RE.fullmatch(text) is not None


def _quote(value: str) -> str:
    return f"'{value}'"


def _format_null_check(f: FilterCondition) -> str:
    return f"{f.column} {f.operator}"


def _format_list(f: FilterCondition) -> str:
    raw = f.value.strip()
    if "'" in raw:
        # Elements are already quoted by the user
        items = raw
    elif "," in raw:
        items = ", ".join(_quote(part.strip()) for part in raw.split(","))
    else:
        items = _quote(raw)
    return f"{f.column} {f.operator} ({items})"


def _format_pattern(f: FilterCondition) -> str:
    return f"{f.column} {f.operator} {_quote(f.value)}"


def _format_binary(f: FilterCondition) -> str:
    trimmed = f.value.strip()
    literal = trimmed if is_numeric_literal(trimmed) else _quote(f.value)
    return f"{f.column} {f.operator} {literal}"


_FORMATTERS: dict[Operator, Callable[[FilterCondition], str]] = {
    Operator.EQ: _format_binary,
    Operator.NE: _format_binary,
    Operator.GT: _format_binary,
    Operator.GE: _format_binary,
    Operator.LT: _format_binary,
    Operator.LE: _format_binary,
    Operator.LIKE: _format_pattern,
    Operator.NOT_LIKE: _format_pattern,
    Operator.IN: _format_list,
    Operator.NOT_IN: _format_list,
    Operator.IS_NULL: _format_null_check,
    Operator.IS_NOT_NULL: _format_null_check,
}


def format_filter(f: FilterCondition) -> str | None:
    """Render one predicate, or ``None`` when it lacks a column or operator."""
    if not f.column or not f.operator:
        return None
    # Unrecognised operators fall through to plain binary formatting
    formatter = _FORMATTERS.get(Operator.parse(f.operator), _format_binary)
    return formatter(f)


def format_aggregation(agg: AggregationConfig) -> str | None:
    if not agg.func or not agg.column:
        return None
    expr = f"{agg.func}({agg.column})"
    return f"{expr} AS {agg.alias}" if agg.alias else expr


# ── Clause assembly ──────────────────────────────────────

def build_clauses(query: VisualQuery) -> ClauseSet:
    """Assemble the base clauses, before any time-series augmentation."""
    where = tuple(p for p in (format_filter(f) for f in query.filters) if p is not None)
    aggregations = tuple(
        a for a in (format_aggregation(agg) for agg in query.aggregations) if a is not None
    )
    return ClauseSet(
        table=query.table or "",
        columns=tuple(c for c in query.columns if c),
        aggregations=aggregations,
        where=where,
        group_by=tuple(c for c in query.group_by if c),
        order_by=tuple((o.column, o.direction) for o in query.order_by if o.column),
        limit=query.limit,
    )


def compile_sql(query: VisualQuery) -> str:
    """Compile *query* to SQL; returns ``""`` when no table is selected."""
    if not query.table:
        return ""

    clauses = apply_time_series(build_clauses(query), query.time_series)
    sql = render_sql(clauses)
    logger.debug("Compiled visual query: %s", sql)
    return sql
