"""
Unit tests — editing transitions return new queries and never mutate input.
"""
from pinot_query.builder import editor
from pinot_query.builder.model import (
    AggregationConfig,
    FilterCondition,
    OrderByConfig,
    TimeSeriesConfig,
    VisualQuery,
    default_visual_query,
)


def _populated() -> VisualQuery:
    return VisualQuery(
        table="orders",
        columns=["id"],
        filters=[FilterCondition(column="status", value="open")],
        aggregations=[AggregationConfig(func="SUM", column="amount")],
        group_by=["status"],
        order_by=[OrderByConfig(column="id")],
        limit=25,
        time_series=TimeSeriesConfig(enabled=True, time_column="ts", auto_apply_time_filter=True),
    )


# ── Table switching ──────────────────────────────────────

def test_with_table_resets_selections():
    q = editor.with_table(_populated(), "users")
    assert q.table == "users"
    assert q.columns == []
    assert q.filters == []
    assert q.aggregations == []
    assert q.group_by == []
    assert q.order_by == []


def test_with_table_keeps_table_independent_settings():
    original = _populated()
    q = editor.with_table(original, "users")
    assert q.limit == 25
    assert q.time_series == original.time_series


def test_with_table_does_not_mutate():
    original = _populated()
    editor.with_table(original, "users")
    assert original == _populated()


def test_with_limit_normalises():
    assert editor.with_limit(_populated(), "abc").limit is None
    assert editor.with_limit(_populated(), 5).limit == 5


def test_with_columns_and_group_by():
    q = editor.with_group_by(editor.with_columns(default_visual_query(), ["a", "b"]), ["a"])
    assert q.columns == ["a", "b"]
    assert q.group_by == ["a"]


# ── Time series ──────────────────────────────────────────

def test_enable_keeps_existing_auto_filter():
    q = editor.with_time_series_enabled(default_visual_query(), True)
    assert q.time_series.enabled is True
    assert q.time_series.auto_apply_time_filter is False


def test_enable_without_config_defaults_auto_filter():
    q = editor.with_time_series_enabled(VisualQuery(table="t", time_series=None), True)
    assert q.time_series.auto_apply_time_filter is True


def test_disable_clears_time_column():
    q = editor.with_time_series_enabled(_populated(), False)
    assert q.time_series == TimeSeriesConfig(
        enabled=False, time_column=None, auto_apply_time_filter=False,
    )


def test_time_column_enables_mode():
    q = editor.with_time_column(default_visual_query(), "ts")
    assert q.time_series.enabled is True
    assert q.time_series.time_column == "ts"


def test_auto_time_filter_toggle():
    q = editor.with_auto_time_filter(_populated(), False)
    assert q.time_series.auto_apply_time_filter is False
    assert q.time_series.time_column == "ts"


def test_time_column_candidates():
    columns = [
        ("ts", "TIMESTAMP"),
        ("host", "STRING"),
        ("epoch", "long"),
        ("day", "DATE"),
        ("count", "INT"),
        ("untyped", None),
    ]
    assert editor.time_column_candidates(columns) == ["ts", "epoch", "day"]


# ── List entries ─────────────────────────────────────────

def test_add_filter_default():
    q = editor.add_filter(default_visual_query())
    assert q.filters == [FilterCondition(column="", operator="=", value="")]


def test_add_aggregation_default():
    q = editor.add_aggregation(default_visual_query())
    assert q.aggregations == [AggregationConfig(func="COUNT", column="*")]


def test_add_order_by_default():
    q = editor.add_order_by(default_visual_query())
    assert q.order_by == [OrderByConfig(column="", direction="ASC")]


def test_remove_entries():
    q = _populated()
    assert editor.remove_filter(q, 0).filters == []
    assert editor.remove_aggregation(q, 0).aggregations == []
    assert editor.remove_order_by(q, 0).order_by == []
    assert len(q.filters) == 1


def test_remove_out_of_range_is_noop():
    q = _populated()
    assert editor.remove_filter(q, 5) is q
    assert editor.remove_order_by(q, -1) is q
