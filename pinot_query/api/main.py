"""
FastAPI application entry-point.
"""
from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pinot_query.api.routers import catalog, sql

app = FastAPI(
    title="Pinot Visual Query Builder",
    version="0.1.0",
    description="Compiles form-built visual queries into Pinot SQL",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(sql.router, prefix="/compile", tags=["Compiler"])
app.include_router(catalog.router, tags=["Catalog"])


@app.get("/health")
def health():
    return {"status": "ok"}
