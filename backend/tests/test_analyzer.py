"""
Unit tests for dataset structure analysis.
"""
import pytest
from dashboard_core.core.config import Settings
from dashboard_core.core.schemas import ColumnType, DataStructure
from dashboard_core.services.analyzer import analyze_data_structure, summarize_columns, unique_count


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


@pytest.mark.unit
def test_analyze_categorical_dataset(sales_by_region, settings):
    """Test structure signals for a region and total dataset."""
    structure = analyze_data_structure(sales_by_region, settings)

    assert structure.column_types == {"region": ColumnType.STRING, "total": ColumnType.NUMBER}
    assert structure.has_categories is True
    assert structure.has_geographic_data is True
    assert structure.has_time_series is False
    assert structure.has_numerical_comparison is False
    assert structure.row_count == 3
    assert structure.column_count == 2


@pytest.mark.unit
def test_analyze_empty_dataset(settings):
    """Test that an empty dataset yields the default structure."""
    assert analyze_data_structure([], settings) == DataStructure()


@pytest.mark.unit
def test_column_order_follows_first_row(settings):
    """Test that columns keep the key order of the first row."""
    rows = [{"b": 1, "a": 2, "c": "x"}]
    structure = analyze_data_structure(rows, settings)
    assert list(structure.column_types) == ["b", "a", "c"]


@pytest.mark.unit
def test_time_series_from_column_name(settings):
    """Test time series detection from a time-like column name."""
    rows = [{"created_time": 1, "value": 2}, {"created_time": 2, "value": 3}]
    structure = analyze_data_structure(rows, settings)

    assert structure.has_time_series is True
    assert structure.has_numerical_comparison is True


@pytest.mark.unit
def test_relative_date_words_are_not_a_time_series(settings):
    """Test that a status column holding now and today stays categorical text."""
    structure = analyze_data_structure([{"status": "now"}, {"status": "today"}], settings)

    assert structure.column_types == {"status": ColumnType.STRING}
    assert structure.has_time_series is False


@pytest.mark.unit
def test_too_many_distinct_values_is_not_a_category():
    """Test that a high-cardinality column is not a category."""
    rows = [{"name": f"item {i}", "value": i} for i in range(25)]
    structure = analyze_data_structure(rows, Settings())
    assert structure.has_categories is False


@pytest.mark.unit
def test_unique_count_counts_missing_once():
    """Test that missing values count as a single distinct value."""
    rows = [{"a": None}, {"a": 1}, {"a": None}]
    assert unique_count(rows, "a") == 2
    assert unique_count([], "a") == 0


@pytest.mark.unit
def test_summarize_picks_category_candidate(sales_by_region, settings):
    """Test column roles for a categorical dataset."""
    structure = analyze_data_structure(sales_by_region, settings)
    summary = summarize_columns(sales_by_region, structure, settings)

    assert summary.string_columns == ["region"]
    assert summary.number_columns == ["total"]
    assert summary.category_candidates == ["region"]
    assert summary.primary_category == "region"
    assert summary.category_unique_count == 2


@pytest.mark.unit
def test_summarize_falls_back_to_date_like_column(settings):
    """Test that a date-like column becomes the primary category."""
    rows = [{"month": "Jan", "total": 1}, {"month": "Feb", "total": 2}]
    structure = analyze_data_structure(rows, settings)
    summary = summarize_columns(rows, structure, settings)

    assert summary.category_candidates == []
    assert summary.date_like_columns == ["month"]
    assert summary.primary_category == "month"
    assert summary.category_unique_count == 2


@pytest.mark.unit
def test_summarize_empty_dataset(settings):
    """Test summarizing an empty dataset."""
    summary = summarize_columns([], DataStructure(), settings)
    assert summary.primary_category is None
    assert summary.category_unique_count == 0
