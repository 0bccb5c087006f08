"""
Tests for the chart suggestion entry point.
"""
import copy
import json
import pytest
from dashboard_core.core.config import Settings
from dashboard_core.core.schemas import ChartType
from dashboard_core.services.suggester import suggest_charts


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def sales_by_region():
    return [
        {"region": "North", "total": 100},
        {"region": "South", "total": 200},
        {"region": "North", "total": 50},
    ]


@pytest.fixture
def monthly_totals():
    return [
        {"month": "Jan", "total": 100},
        {"month": "Feb", "total": 120},
        {"month": "Mar", "total": 150},
    ]


@pytest.mark.integration
def test_regional_comparison(sales_by_region, settings):
    """Test suggestions for a regional comparison."""
    suggestions = suggest_charts(sales_by_region, "vendas por região", settings)

    assert [s.type for s in suggestions] == [ChartType.BAR, ChartType.PIE]
    bar = suggestions[0]
    assert bar.confidence == pytest.approx(0.75)
    assert bar.title == "Bar Chart"
    assert bar.reasoning == "A bar chart is ideal for comparing sales across different regions"
    assert bar.config.data.labels == ["North", "South"]
    assert bar.config.data.datasets[0].data == [150.0, 200.0]
    assert suggestions[1].confidence == pytest.approx(0.7)


@pytest.mark.integration
def test_monthly_growth(monthly_totals, settings):
    """Test suggestions for a monthly growth question."""
    suggestions = suggest_charts(monthly_totals, "crescimento", settings)

    assert [s.type for s in suggestions] == [ChartType.LINE, ChartType.AREA]
    line = suggestions[0]
    assert line.confidence == 1.0
    assert line.reasoning == "A line chart highlights growth and trends between months"
    assert line.config.data.labels == ["Jan", "Feb", "Mar"]
    assert line.config.data.datasets[1].data == [None, 20.0, 25.0]

    card = line.config.meta.cards[0]
    assert card.title == "Growth Feb→Mar"
    assert card.value == "▲ 25% (+30)"
    assert "Recent change: ▲ 25% (+30)." in line.config.meta.narrative


@pytest.mark.integration
def test_empty_dataset(settings):
    """Test suggestions for an empty dataset."""
    suggestions = suggest_charts([], None, settings)

    assert [s.type for s in suggestions] == [ChartType.TABLE, ChartType.BAR]
    assert all(s.confidence == 0.5 for s in suggestions)
    table, bar = suggestions
    assert table.config.meta.narrative == "Total records: 0."
    assert bar.config.meta is None


@pytest.mark.integration
def test_distribution_question_normalizes_to_percent(sales_by_region, settings):
    """Test that a distribution question normalizes the pie to 100%."""
    suggestions = suggest_charts(sales_by_region, "distribution of total", settings)
    pie = next(s for s in suggestions if s.type == ChartType.PIE)

    assert sum(pie.config.data.datasets[0].data) == pytest.approx(100.0, abs=0.01)
    assert pie.config.options.tooltip.label_template == "{label}: {value}%"


@pytest.mark.integration
def test_distribution_of_equal_slices_adds_up_to_100():
    """Test that seven equal categories still sum to exactly 100%."""
    rows = [{"region": f"Region {i}", "total": 10} for i in range(7)]
    suggestions = suggest_charts(rows, "distribution of total", Settings(pie_max_categories=10))
    pie = next(s for s in suggestions if s.type == ChartType.PIE)

    data = pie.config.data.datasets[0].data
    assert data == [14.29] * 4 + [14.28] * 3
    assert sum(data) == pytest.approx(100.0, abs=0.01)


@pytest.mark.integration
def test_portuguese_output(sales_by_region):
    """Test suggestion text in Portuguese."""
    suggestions = suggest_charts(sales_by_region, "vendas por região", Settings(language="pt"))

    assert suggestions[0].title == "Gráfico de Barras"
    assert suggestions[0].reasoning == "Gráfico de barras é ideal para comparar vendas entre diferentes regiões"
    assert suggestions[0].config.options.title.text == "total por region"


@pytest.mark.integration
def test_result_is_deterministic(monthly_totals, settings):
    """Test that the same input gives the same result."""
    first = [s.model_dump() for s in suggest_charts(monthly_totals, "trend", settings)]
    second = [s.model_dump() for s in suggest_charts(monthly_totals, "trend", settings)]
    assert first == second


@pytest.mark.integration
def test_at_most_three_sorted_suggestions(settings):
    """Test the suggestion count and order."""
    rows = [
        {"region": "North", "product": "Laptop", "month": "Jan", "price": 10, "sales": 100},
        {"region": "South", "product": "Phone", "month": "Feb", "price": 12, "sales": 90},
        {"region": "North", "product": "Phone", "month": "Mar", "price": 9, "sales": 130},
    ]
    question = "top regions, distribution and correlation of sales over time"
    suggestions = suggest_charts(rows, question, settings)

    assert 1 <= len(suggestions) <= 3
    confidences = [s.confidence for s in suggestions]
    assert confidences == sorted(confidences, reverse=True)
    assert all(0.0 <= c <= 1.0 for c in confidences)


@pytest.mark.integration
def test_max_suggestions_setting(sales_by_region):
    """Test the max_suggestions setting."""
    assert len(suggest_charts(sales_by_region, None, Settings(max_suggestions=1))) == 1


@pytest.mark.integration
def test_rows_are_not_modified(sales_by_region, settings):
    """Test that input rows are not modified."""
    snapshot = copy.deepcopy(sales_by_region)
    suggest_charts(sales_by_region, "distribution", settings)
    assert sales_by_region == snapshot


@pytest.mark.integration
def test_suggestions_are_json_serializable(monthly_totals, settings):
    """Test that suggestions serialize to JSON."""
    for s in suggest_charts(monthly_totals, "crescimento", settings):
        payload = json.loads(json.dumps(s.model_dump(mode="json")))
        assert payload["type"] in {t.value for t in ChartType}
        assert payload["config"]["type"] == payload["type"]


@pytest.mark.integration
@pytest.mark.parametrize("rows", [
    [{"month": "Jan", "total": "Infinity"}, {"month": "Feb", "total": "5"}],
    [{"month": "Jan", "total": 1e308}, {"month": "Jan", "total": 1e308}, {"month": "Feb", "total": 5}],
])
def test_overflowing_values_stay_finite(rows, settings):
    """Test that infinite or overflowing totals never reach the serialized output."""
    suggestions = suggest_charts(rows, "growth", settings)

    assert suggestions
    for s in suggestions:
        json.dumps(s.model_dump(mode="json"), allow_nan=False)
