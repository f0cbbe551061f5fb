"""
GET /operators, GET /aggregations, /visual-query/* -- editor metadata endpoints.
"""
from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel

from pinot_query.builder.editor import with_table
from pinot_query.builder.model import (
    AGGREGATION_FUNCTIONS,
    FILTER_OPERATORS,
    NULL_CHECK_OPERATORS,
    VisualQuery,
    default_visual_query,
)

router = APIRouter()



class OperatorItem(BaseModel):
    value: str
    needs_value: bool


class TableSwitchRequest(BaseModel):
    query: VisualQuery
    table: str



@router.get("/operators", response_model=list[OperatorItem])
def list_operators() -> list[OperatorItem]:
    """Return the filter operator menu in display order."""
    return [
        OperatorItem(value=op.value, needs_value=op not in NULL_CHECK_OPERATORS)
        for op in FILTER_OPERATORS
    ]


@router.get("/aggregations")
def list_aggregations() -> dict:
    """Return the aggregate function menu."""
    return {"functions": list(AGGREGATION_FUNCTIONS)}


@router.get("/visual-query/default", response_model=VisualQuery)
def default_query() -> VisualQuery:
    """Return the empty query a new visual editing session starts from."""
    return default_visual_query()


@router.post("/visual-query/table", response_model=VisualQuery)
def switch_table(req: TableSwitchRequest) -> VisualQuery:
    """Select another table, resetting the table-specific parts of the query."""
    return with_table(req.query, req.table)
