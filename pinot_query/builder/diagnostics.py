"""
Reports what the best-effort compiler will leave out of a VisualQuery.

Compilation itself never fails; these messages let an editing surface show
the user which entries are incomplete.  Checks performed:
  1. A table is selected
  2. Every filter has a column and an operator
  3. Filter operators are known (unknown ones are formatted as plain binary)
  4. Every aggregation has a function and a column
  5. Every order-by entry has a column
  6. The limit is a positive number
  7. Time-series mode has a time column when enabled
"""
from __future__ import annotations

from pinot_query.builder.model import Operator, VisualQuery


def diagnose(query: VisualQuery) -> list[str]:
    """Return a list of warnings (empty list = every entry will be compiled)."""
    warnings: list[str] = []

    if not query.table:
        warnings.append("No table selected; the query compiles to an empty statement.")
        return warnings  # nothing else is compiled without a table

    for i, f in enumerate(query.filters, start=1):
        if not f.column or not f.operator:
            missing = "column" if not f.column else "operator"
            warnings.append(f"Filter #{i} has no {missing} and is skipped.")
        elif Operator.parse(f.operator) is None:
            warnings.append(
                f"Filter #{i} uses unknown operator '{f.operator}'; "
                "it is treated as a plain binary operator."
            )

    for i, agg in enumerate(query.aggregations, start=1):
        if not agg.func or not agg.column:
            missing = "function" if not agg.func else "column"
            warnings.append(f"Aggregation #{i} has no {missing} and is skipped.")

    for i, order in enumerate(query.order_by, start=1):
        if not order.column:
            warnings.append(f"Order-by #{i} has no column and is skipped.")

    if query.limit is None:
        warnings.append("No limit set; the query has no LIMIT clause.")
    elif query.limit <= 0:
        warnings.append(f"Limit {query.limit} is not positive; the LIMIT clause is omitted.")

    ts = query.time_series
    if ts is not None and ts.enabled and not ts.time_column:
        warnings.append("Time series is enabled but no time column is selected.")

    return warnings
