"""
ClauseSet -- the intermediate, clause-by-clause form of a compiled query.

Each field holds the fragments one clause contributes.  Rendering joins only
the non-empty clauses, so every omission rule lives in the code that fills a
field and can be tested on its own.
"""
from __future__ import annotations

from dataclasses import dataclass

from pinot_query.builder.model import WILDCARD


@dataclass(frozen=True)
class ClauseSet:
    table: str
    columns: tuple[str, ...] = ()
    aggregations: tuple[str, ...] = ()
    where: tuple[str, ...] = ()
    group_by: tuple[str, ...] = ()
    order_by: tuple[tuple[str, str], ...] = ()  # (column, direction)
    limit: int | None = None
    time_column: str | None = None  # pinned first in SELECT

    def select_items(self) -> list[str]:
        items: list[str] = []
        if self.time_column:
            items.append(self.time_column)
        items.extend(c for c in self.columns if c != self.time_column)
        items.extend(self.aggregations)

        if not items:
            return [WILDCARD]
        # A lone time column is never useful; keep the rest of the row too
        if items == [self.time_column] and not self.columns and not self.aggregations:
            items.append(WILDCARD)
        return items


def render_sql(clauses: ClauseSet) -> str:
    """Join the non-empty clauses into a single-line statement."""
    fragments = [
        f"SELECT {', '.join(clauses.select_items())}",
        f"FROM {clauses.table}",
    ]
    if clauses.where:
        fragments.append("WHERE " + " AND ".join(clauses.where))
    if clauses.group_by:
        fragments.append("GROUP BY " + ", ".join(clauses.group_by))
    if clauses.order_by:
        fragments.append(
            "ORDER BY " + ", ".join(f"{col} {direction}" for col, direction in clauses.order_by)
        )
    if clauses.limit is not None and clauses.limit > 0:
        fragments.append(f"LIMIT {clauses.limit}")
    return " ".join(fragments)
