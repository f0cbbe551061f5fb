"""POST /compile -- live SQL preview for a visual query."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field
from fastapi import APIRouter, HTTPException

from pinot_query.builder.compiler import compile_sql
from pinot_query.builder.diagnostics import diagnose
from pinot_query.builder.macros import apply_macros
from pinot_query.builder.model import VisualQuery
from pinot_query.core.logging import get_logger

logger = get_logger(__name__)
router = APIRouter()



class CompileResponse(BaseModel):
    sql: str
    warnings: list[str]


class PreviewRequest(BaseModel):
    query: VisualQuery
    time_from: datetime = Field(..., description="Start of the dashboard time range")
    time_to: datetime = Field(..., description="End of the dashboard time range")


class PreviewResponse(BaseModel):
    sql: str
    expanded_sql: str



@router.post("", response_model=CompileResponse)
def compile_endpoint(query: VisualQuery):
    """Compile a visual query and list the entries left out of the statement."""
    return CompileResponse(sql=compile_sql(query), warnings=diagnose(query))


@router.post("/preview", response_model=PreviewResponse)
def preview_endpoint(req: PreviewRequest):
    """Compile, then expand time macros against the given range."""
    sql = compile_sql(req.query)
    try:
        expanded = apply_macros(sql, req.time_from, req.time_to)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except Exception as exc:
        logger.exception("Macro expansion failed")
        raise HTTPException(status_code=500, detail=str(exc))
    return PreviewResponse(sql=sql, expanded_sql=expanded)
