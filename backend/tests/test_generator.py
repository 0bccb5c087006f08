"""
Unit tests for the generator service.
"""
import pytest
from dashboard_core.core.config import Settings
from dashboard_core.core.schemas import (
    CartesianChartConfig,
    ChartType,
    PieChartConfig,
    ScatterChartConfig,
    TableChartConfig,
)
from dashboard_core.services.analyzer import analyze_data_structure, summarize_columns
from dashboard_core.services.generator import (
    CATEGORICAL_PALETTE,
    aggregate_by_category,
    build_chart_config,
    find_category_column,
    find_value_column,
    format_label,
    generate_colors,
    month_order,
)


def build(chart_type, rows, settings=None):
    settings = settings or Settings()
    structure = analyze_data_structure(rows, settings)
    summary = summarize_columns(rows, structure, settings)
    return build_chart_config(chart_type, rows, structure, summary, settings)


@pytest.mark.unit
def test_aggregate_sums_per_category_in_first_seen_order():
    """Test category sums in first-seen order."""
    rows = [
        {"cat": "B", "v": 1},
        {"cat": "A", "v": 2},
        {"cat": "B", "v": 3},
    ]
    labels, values = aggregate_by_category(rows, "cat", "v")
    assert labels == ["B", "A"]
    assert values == [4.0, 2.0]


@pytest.mark.unit
def test_aggregate_treats_non_numeric_values_as_zero():
    """Test that non-numeric values add 0."""
    rows = [{"cat": "A", "v": "n/a"}, {"cat": "A", "v": "5"}, {"cat": "B", "v": None}]
    assert aggregate_by_category(rows, "cat", "v") == (["A", "B"], [5.0, 0.0])


@pytest.mark.unit
def test_aggregate_overflowing_sum_counts_as_zero():
    """Test that a category total overflowing to infinity is reported as 0."""
    rows = [{"cat": "A", "v": 1e308}, {"cat": "A", "v": 1e308}, {"cat": "B", "v": 2}]
    assert aggregate_by_category(rows, "cat", "v") == (["A", "B"], [0.0, 2.0])


@pytest.mark.unit
def test_bar_config_aggregates_by_region():
    """Test the bar chart configuration."""
    rows = [
        {"region": "North", "total": 100},
        {"region": "South", "total": 200},
        {"region": "North", "total": 50},
    ]
    config = build(ChartType.BAR, rows)

    assert isinstance(config, CartesianChartConfig)
    assert config.type == ChartType.BAR
    assert config.data.labels == ["North", "South"]
    assert config.data.datasets[0].data == [150.0, 200.0]
    assert config.data.datasets[0].label == "total"
    assert config.options.title.text == "total by region"
    assert config.options.scales["y"].begin_at_zero is True


@pytest.mark.unit
def test_line_config_orders_english_months():
    """Test that line labels follow calendar order."""
    rows = [
        {"month": "Mar", "total": 3},
        {"month": "Jan", "total": 1},
        {"month": "Feb", "total": 2},
    ]
    config = build(ChartType.LINE, rows)

    assert config.data.labels == ["Jan", "Feb", "Mar"]
    assert config.data.datasets[0].data == [1.0, 2.0, 3.0]


@pytest.mark.unit
def test_area_config_orders_portuguese_months():
    """Test calendar order for Portuguese month names."""
    rows = [
        {"mes": "Março", "total": 30},
        {"mes": "Janeiro", "total": 10},
        {"mes": "Fevereiro", "total": 20},
    ]
    config = build(ChartType.AREA, rows)

    assert config.data.labels == ["Janeiro", "Fevereiro", "Março"]
    assert config.data.datasets[0].data == [10.0, 20.0, 30.0]
    assert config.data.datasets[0].fill is True


@pytest.mark.unit
def test_month_order_keeps_insertion_order_for_mixed_labels():
    """Test that mixed labels keep their order."""
    assert month_order(["Jan", "Total"]) is None
    assert month_order([]) is None
    assert month_order(["fev", "Jan", "dezembro"]) == [1, 0, 2]


@pytest.mark.unit
def test_pie_config_colors_each_slice():
    """Test one color per pie slice."""
    rows = [{"region": name, "total": i} for i, name in enumerate(["North", "South", "West"])]
    config = build(ChartType.PIE, rows)

    assert isinstance(config, PieChartConfig)
    assert config.data.datasets[0].background_color == CATEGORICAL_PALETTE[:3]
    assert config.options.legend.position == "bottom"


@pytest.mark.unit
def test_generate_colors_cycles_palette():
    """Test that colors cycle through the palette."""
    colors = generate_colors(12)
    assert len(colors) == 12
    assert colors[10] == CATEGORICAL_PALETTE[0]
    assert colors[11] == CATEGORICAL_PALETTE[1]


@pytest.mark.unit
def test_horizontal_bar_uses_y_index_axis():
    """Test the horizontal bar configuration."""
    rows = [{"product": "Laptop", "sales": 5}, {"product": "Phone", "sales": 7}]
    config = build(ChartType.HORIZONTAL_BAR, rows)

    assert config.options.index_axis == "y"
    assert config.options.scales["x"].begin_at_zero is True
    assert config.data.labels == ["Laptop", "Phone"]


@pytest.mark.unit
def test_scatter_config_points():
    """Test scatter points from two numeric columns."""
    rows = [{"price": 10, "units": 3}, {"price": 20, "units": "5"}]
    config = build(ChartType.SCATTER, rows)

    assert isinstance(config, ScatterChartConfig)
    points = config.data.datasets[0].data
    assert [(p.x, p.y) for p in points] == [(10.0, 3.0), (20.0, 5.0)]
    assert config.data.datasets[0].label == "units vs price"
    assert config.options.scales["x"].title == "price"


@pytest.mark.unit
def test_scatter_falls_back_to_bar_with_one_numeric_column():
    """Test the scatter fallback to a bar chart."""
    rows = [{"product": "Laptop", "sales": 5}, {"product": "Phone", "sales": 7}]
    assert build(ChartType.SCATTER, rows).type == ChartType.BAR


@pytest.mark.unit
def test_table_config_uses_first_row_columns():
    """Test table columns and rows."""
    rows = [{"a": 1, "b": "x"}, {"a": 2, "b": "y", "c": True}]
    config = build(ChartType.TABLE, rows)

    assert isinstance(config, TableChartConfig)
    assert config.data.columns == ["a", "b"]
    assert config.data.rows == [[1, "x"], [2, "y"]]


@pytest.mark.unit
def test_table_config_blanks_infinite_cells():
    """Test that infinite cells are shown as empty table cells."""
    config = build(ChartType.TABLE, [{"a": float("inf"), "b": "x"}, {"a": 1.5, "b": "y"}])
    assert config.data.rows == [[None, "x"], [1.5, "y"]]


@pytest.mark.unit
def test_bar_groups_by_second_category():
    """Test grouped bars for a second category."""
    rows = [
        {"region": "North", "product": "Laptop", "total": 10},
        {"region": "North", "product": "Phone", "total": 5},
        {"region": "South", "product": "Laptop", "total": 7},
    ]
    config = build(ChartType.BAR, rows)

    assert config.data.labels == ["North", "South"]
    assert [ds.label for ds in config.data.datasets] == ["Laptop", "Phone"]
    assert config.data.datasets[0].data == [10.0, 7.0]
    assert config.data.datasets[1].data == [5.0, 0.0]


@pytest.mark.unit
def test_bar_grouping_respects_series_limit():
    """Test that grouping is skipped above the series limit."""
    rows = [
        {"region": "North", "product": "Laptop", "total": 10},
        {"region": "North", "product": "Phone", "total": 5},
        {"region": "South", "product": "Laptop", "total": 7},
    ]
    config = build(ChartType.BAR, rows, Settings(max_series=1))
    assert len(config.data.datasets) == 1
    assert config.data.datasets[0].data == [15.0, 7.0]


@pytest.mark.unit
def test_map_config_by_geographic_column():
    """Test the map configuration."""
    rows = [{"country": "Brazil", "sales": 3}, {"country": "Chile", "sales": 4}]
    config = build(ChartType.MAP, rows)

    assert config.type == ChartType.MAP
    assert config.data.labels == ["Brazil", "Chile"]


@pytest.mark.unit
def test_portuguese_titles():
    """Test chart titles in Portuguese."""
    rows = [{"region": "North", "total": 1}, {"region": "South", "total": 2}]
    config = build(ChartType.BAR, rows, Settings(language="pt"))
    assert config.options.title.text == "total por region"


@pytest.mark.unit
def test_long_titles_are_truncated():
    """Test title truncation."""
    column = "a_very_long_measure_name_that_keeps_going_and_going_forever"
    rows = [{"region": "North", column: 1}, {"region": "South", column: 2}]
    title = build(ChartType.BAR, rows).options.title.text
    assert len(title) == 60
    assert title.endswith("...")


@pytest.mark.unit
def test_empty_dataset_builds_empty_bar():
    """Test the bar configuration for an empty dataset."""
    config = build(ChartType.BAR, [])
    assert config.data.labels == []
    assert config.data.datasets[0].data == []


@pytest.mark.unit
def test_column_resolution_priorities():
    """Test category and value column resolution."""
    rows = [{"id": 1, "city": "Lima", "amount": 2, "count": 3}]
    structure = analyze_data_structure(rows, Settings())
    assert find_category_column(structure) == "city"
    assert find_value_column(structure) == "amount"


@pytest.mark.unit
def test_format_label():
    """Test label formatting."""
    assert format_label(2.0) == "2"
    assert format_label(2.5) == "2.5"
    assert format_label(True) == "true"
    assert format_label(None) == ""
