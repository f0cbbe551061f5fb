"""
Unit tests — diagnostics: every contribution the compiler drops is reported.
"""
from pinot_query.builder.diagnostics import diagnose
from pinot_query.builder.model import (
    AggregationConfig,
    FilterCondition,
    OrderByConfig,
    TimeSeriesConfig,
    VisualQuery,
)


def _query(**overrides) -> VisualQuery:
    base = {"table": "t", "limit": 100}
    base.update(overrides)
    return VisualQuery(**base)


def test_complete_query_no_warnings():
    q = _query(
        columns=["a"],
        filters=[FilterCondition(column="a", operator="IN", value="x")],
        aggregations=[AggregationConfig()],
        order_by=[OrderByConfig(column="a")],
    )
    assert diagnose(q) == []


def test_missing_table_stops_early():
    warnings = diagnose(_query(table=None, limit=None))
    assert len(warnings) == 1
    assert "No table" in warnings[0]


def test_filter_without_operator():
    warnings = diagnose(_query(filters=[FilterCondition(column="a", operator="")]))
    assert warnings == ["Filter #1 has no operator and is skipped."]


def test_filter_without_column():
    warnings = diagnose(_query(filters=[FilterCondition(), FilterCondition(column="b")]))
    assert warnings == ["Filter #1 has no column and is skipped."]


def test_unknown_operator_reported():
    warnings = diagnose(_query(filters=[FilterCondition(column="a", operator="<>")]))
    assert any("unknown operator '<>'" in w for w in warnings)


def test_incomplete_aggregation():
    warnings = diagnose(_query(aggregations=[AggregationConfig(func="SUM", column="")]))
    assert warnings == ["Aggregation #1 has no column and is skipped."]


def test_order_by_without_column():
    warnings = diagnose(_query(order_by=[OrderByConfig(column="a"), OrderByConfig()]))
    assert warnings == ["Order-by #2 has no column and is skipped."]


def test_limit_warnings():
    assert any("No limit" in w for w in diagnose(_query(limit=None)))
    assert any("not positive" in w for w in diagnose(_query(limit=0)))


def test_time_series_without_column():
    q = _query(time_series=TimeSeriesConfig(enabled=True))
    assert diagnose(q) == ["Time series is enabled but no time column is selected."]
