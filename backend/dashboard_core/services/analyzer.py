"""
Dataset structure analysis.

Derives dataset-level signals (time series, categories, numeric comparison,
geography) from inferred column types and column names, and buckets the
columns into the roles the chart selector and builders work with.
"""
import logging
from typing import Any, Dict, List, Optional
import pandas as pd

from dashboard_core.core.config import Settings, get_settings
from dashboard_core.core.schemas import ColumnSummary, ColumnType, DataStructure
from dashboard_core.services.classifier import classify_column

logger = logging.getLogger(__name__)

TIME_NAME_HINTS = ("month", "date", "time")
GEO_NAME_HINTS = ("region", "country", "state", "city", "location")


def name_matches(column: str, hints) -> bool:
    lower = column.lower()
    return any(h in lower for h in hints)


def unique_count(rows: List[Dict[str, Any]], column: str) -> int:
    """Distinct values of a column, counting a missing value as one value."""
    if not rows:
        return 0
    return int(pd.Series([row.get(column) for row in rows], dtype=object).nunique(dropna=False))


def _is_category_sized(count: int, settings: Settings) -> bool:
    return settings.category_min_unique <= count <= settings.category_max_unique


def analyze_data_structure(rows: List[Dict[str, Any]], settings: Optional[Settings] = None) -> DataStructure:
    """
    Build the DataStructure snapshot for a dataset.

    Column names come from the first row. An empty dataset yields all
    signals false and no column types.
    """
    settings = settings or get_settings()

    if not rows:
        return DataStructure()

    columns = list(rows[0].keys())
    column_types = {
        column: classify_column(rows, column, settings.type_sample_size)
        for column in columns
    }

    date_columns = [c for c, t in column_types.items() if t == ColumnType.DATE]
    string_columns = [c for c, t in column_types.items() if t == ColumnType.STRING]
    number_columns = [c for c, t in column_types.items() if t == ColumnType.NUMBER]

    has_time_series = bool(date_columns) or any(name_matches(c, TIME_NAME_HINTS) for c in columns)
    has_categories = any(_is_category_sized(unique_count(rows, c), settings) for c in string_columns)
    has_numerical_comparison = len(number_columns) >= 2
    has_geographic_data = any(name_matches(c, GEO_NAME_HINTS) for c in columns)

    structure = DataStructure(
        has_time_series=has_time_series,
        has_categories=has_categories,
        has_numerical_comparison=has_numerical_comparison,
        has_geographic_data=has_geographic_data,
        column_types=column_types,
        row_count=len(rows),
        column_count=len(columns),
    )
    logger.debug(
        f"Analyzed {structure.row_count} rows, {structure.column_count} columns: "
        f"time_series={has_time_series}, categories={has_categories}, "
        f"numeric_comparison={has_numerical_comparison}, geographic={has_geographic_data}"
    )
    return structure


def summarize_columns(
    rows: List[Dict[str, Any]],
    structure: DataStructure,
    settings: Optional[Settings] = None,
) -> ColumnSummary:
    """Bucket columns by role and pick the primary category column."""
    settings = settings or get_settings()
    column_types = structure.column_types

    string_columns = [c for c, t in column_types.items() if t == ColumnType.STRING]
    number_columns = [c for c, t in column_types.items() if t == ColumnType.NUMBER]
    date_like_columns = [
        c for c, t in column_types.items()
        if t == ColumnType.DATE or name_matches(c, TIME_NAME_HINTS)
    ]

    counts = {c: unique_count(rows, c) for c in string_columns}
    category_candidates = [c for c in string_columns if _is_category_sized(counts[c], settings)]

    primary_category = next(iter(category_candidates + string_columns + date_like_columns), None)
    if primary_category is None:
        primary_unique = 0
    elif primary_category in counts:
        primary_unique = counts[primary_category]
    else:
        primary_unique = unique_count(rows, primary_category)

    return ColumnSummary(
        string_columns=string_columns,
        number_columns=number_columns,
        date_like_columns=date_like_columns,
        category_candidates=category_candidates,
        primary_category=primary_category,
        category_unique_count=primary_unique,
    )
