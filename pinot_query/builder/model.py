"""
Visual query model -- the structured, form-editable representation of a
Pinot SQL query.

The model carries no behaviour beyond defaults and input normalisation.
Every record is frozen: editing surfaces replace a ``VisualQuery`` wholesale
(see ``pinot_query.builder.editor``) instead of patching it in place.
"""
from __future__ import annotations

import re
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pinot_query.core.config import get_settings


class Operator(str, Enum):
    """The closed set of filter operators the compiler knows how to format."""

    EQ = "="
    NE = "!="
    GT = ">"
    GE = ">="
    LT = "<"
    LE = "<="
    LIKE = "LIKE"
    NOT_LIKE = "NOT LIKE"
    IN = "IN"
    NOT_IN = "NOT IN"
    IS_NULL = "IS NULL"
    IS_NOT_NULL = "IS NOT NULL"

    @classmethod
    def parse(cls, text: str) -> Operator | None:
        """Return the matching member, or ``None`` for an unrecognised token."""
        try:
            return cls(text)
        except ValueError:
            return None


NULL_CHECK_OPERATORS = frozenset({Operator.IS_NULL, Operator.IS_NOT_NULL})

# Menus offered by the editing surface; the compiler does not enforce them.
FILTER_OPERATORS: tuple[Operator, ...] = tuple(Operator)
AGGREGATION_FUNCTIONS: tuple[str, ...] = (
    "COUNT",
    "SUM",
    "AVG",
    "MIN",
    "MAX",
    "DISTINCTCOUNT",
    "DISTINCTCOUNTSMARTHLL",
    "PERCENTILE",
    "PERCENTILETDIGEST",
)

WILDCARD = "*"

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class FilterCondition(_Record):
    """One WHERE predicate as entered in the filter editor."""

    column: str = Field("", description="Column the predicate applies to")
    operator: str = Field("=", description="Operator token, see Operator")
    value: str = Field("", description="Raw text; quoting is decided at compile time")

    @field_validator("value", mode="before")
    @classmethod
    def _none_is_blank(cls, value: Any) -> Any:
        return "" if value is None else value


class AggregationConfig(_Record):
    func: str = Field("COUNT", description="Aggregate function name, e.g. SUM")
    column: str = Field(WILDCARD, description="Aggregated column or '*'")
    alias: str | None = Field(None, description="Optional output name")


class OrderByConfig(_Record):
    column: str = ""
    direction: Literal["ASC", "DESC"] = "ASC"


class TimeSeriesConfig(_Record):
    """Settings for time-series augmentation of the compiled statement."""

    enabled: bool = False
    time_column: str | None = Field(None, alias="timeColumn")
    auto_apply_time_filter: bool = Field(False, alias="autoApplyTimeFilter")


class VisualQuery(_Record):
    """Aggregate root of the visual query model."""

    table: str | None = None
    columns: list[str] = Field(default_factory=list)
    filters: list[FilterCondition] = Field(default_factory=list)
    aggregations: list[AggregationConfig] = Field(default_factory=list)
    group_by: list[str] = Field(default_factory=list, alias="groupBy")
    order_by: list[OrderByConfig] = Field(default_factory=list, alias="orderBy")
    limit: int | None = 100
    time_series: TimeSeriesConfig | None = Field(
        default_factory=TimeSeriesConfig, alias="timeSeries",
    )

    @field_validator("columns", "filters", "aggregations", "group_by", "order_by", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("limit", mode="before")
    @classmethod
    def _coerce_limit(cls, value: Any) -> int | None:
        """Normalise whatever the limit input produced; unusable input means no LIMIT."""
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            return int(value) if value.is_integer() else None
        if isinstance(value, str):
            text = value.strip()
            if _INTEGER_RE.fullmatch(text):
                return int(text)
        return None

    @property
    def time_column(self) -> str | None:
        """The time column in effect, or ``None`` when time-series mode is off."""
        ts = self.time_series
        if ts is None or not ts.enabled or not ts.time_column:
            return None
        return ts.time_column


def default_visual_query() -> VisualQuery:
    """Return the all-empty query a new visual editing session starts from."""
    return VisualQuery(
        table=None,
        columns=[],
        filters=[],
        aggregations=[],
        group_by=[],
        order_by=[],
        limit=get_settings().default_limit,
        time_series=TimeSeriesConfig(enabled=False, auto_apply_time_filter=False),
    )
