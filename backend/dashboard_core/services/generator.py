"""
Chart configuration generator.

This module builds renderer-agnostic chart configurations for each chart
type: it resolves the category and value columns, aggregates the rows,
orders month labels and fills in display options.
"""
import logging
import math
from typing import Any, Callable, Dict, List, Optional, Tuple
import numpy as np
import pandas as pd

from dashboard_core.core.config import Settings, get_settings
from dashboard_core.core.messages import chart_text
from dashboard_core.core.schemas import (
    AxisOptions,
    CartesianChartConfig,
    ChartConfig,
    ChartOptions,
    ChartType,
    ColumnSummary,
    ColumnType,
    DataStructure,
    GridData,
    LegendOptions,
    PieChartConfig,
    Point,
    PointData,
    PointSeries,
    ScatterChartConfig,
    Series,
    SeriesData,
    TableChartConfig,
    TitleOptions,
)
from dashboard_core.services.analyzer import GEO_NAME_HINTS, TIME_NAME_HINTS, name_matches, unique_count
from dashboard_core.services.classifier import ValueKind, month_position, to_number, value_kind

logger = logging.getLogger(__name__)

# Colorblind-safe categorical palette
CATEGORICAL_PALETTE = [
    '#1f77b4',  # Blue
    '#ff7f0e',  # Orange
    '#2ca02c',  # Green
    '#d62728',  # Red
    '#9467bd',  # Purple
    '#8c564b',  # Brown
    '#e377c2',  # Pink
    '#7f7f7f',  # Gray
    '#bcbd22',  # Yellow-green
    '#17becf'   # Cyan
]

VALUE_NAME_HINTS = ("sales", "amount", "total", "value", "quantity")

MAX_TITLE_LENGTH = 60


def generate_colors(count: int) -> List[str]:
    """Cycle the categorical palette for ``count`` items."""
    return [CATEGORICAL_PALETTE[i % len(CATEGORICAL_PALETTE)] for i in range(count)]


def _title(text: str) -> TitleOptions:
    # Truncate very long titles to prevent overflow
    display_title = text if len(text) <= MAX_TITLE_LENGTH else text[:MAX_TITLE_LENGTH - 3] + "..."
    return TitleOptions(display=True, text=display_title)


def format_label(value: Any) -> str:
    """String form of a category value (integral floats without '.0', booleans lower-case)."""
    kind = value_kind(value)
    if kind == ValueKind.MISSING:
        return ""
    if kind == ValueKind.BOOLEAN:
        return "true" if value else "false"
    if kind == ValueKind.NUMBER and isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def find_category_column(structure: DataStructure) -> str:
    """
    Pick the column that labels the chart.

    Priority: geographic name, time-ish name, date type, string type,
    then the first column. Empty string when there are no columns.
    """
    columns = list(structure.column_types)

    for matches in (
        lambda c: name_matches(c, GEO_NAME_HINTS),
        lambda c: name_matches(c, TIME_NAME_HINTS),
        lambda c: structure.column_types[c] == ColumnType.DATE,
        lambda c: structure.column_types[c] == ColumnType.STRING,
    ):
        found = next((c for c in columns if matches(c)), None)
        if found is not None:
            return found

    return columns[0] if columns else ""


def find_value_column(structure: DataStructure) -> str:
    """
    Pick the column that supplies the values.

    Priority: a numeric column named like a measure (sales, amount, total,
    value, quantity), the first numeric column, the second column, then the
    first column.
    """
    columns = list(structure.column_types)
    numeric_columns = [c for c in columns if structure.column_types[c] == ColumnType.NUMBER]

    preferred = [c for c in numeric_columns if name_matches(c, VALUE_NAME_HINTS)]
    if preferred:
        return preferred[0]
    if numeric_columns:
        return numeric_columns[0]
    if len(columns) > 1:
        return columns[1]
    return columns[0] if columns else ""


def _finite_sums(totals: pd.Series) -> pd.Series:
    # sums of very large values can overflow to inf
    return totals.where(np.isfinite(totals), 0.0)


def aggregate_by_category(
    rows: List[Dict[str, Any]],
    category_column: str,
    value_column: str,
) -> Tuple[List[str], List[float]]:
    """Sum the value column per category label, groups in first-seen order."""
    if not rows:
        return [], []

    frame = pd.DataFrame({
        "label": [format_label(row.get(category_column)) for row in rows],
        "value": [to_number(row.get(value_column)) for row in rows],
    })
    totals = _finite_sums(frame.groupby("label", sort=False)["value"].sum())
    return [str(label) for label in totals.index], [float(v) for v in totals.tolist()]


def aggregate_by_group(
    rows: List[Dict[str, Any]],
    category_column: str,
    group_column: str,
    value_column: str,
) -> Tuple[List[str], Dict[str, List[float]]]:
    """Sum the value column per (category, group) pair; one value list per group."""
    if not rows:
        return [], {}

    frame = pd.DataFrame({
        "label": [format_label(row.get(category_column)) for row in rows],
        "group": [format_label(row.get(group_column)) for row in rows],
        "value": [to_number(row.get(value_column)) for row in rows],
    })
    totals = _finite_sums(frame.groupby(["label", "group"], sort=False)["value"].sum())
    labels = list(dict.fromkeys(frame["label"]))
    groups = list(dict.fromkeys(frame["group"]))

    values = {
        group: [float(totals.get((label, group), 0.0)) for label in labels]
        for group in groups
    }
    return labels, values


def month_order(labels: List[str]) -> Optional[List[int]]:
    """
    Chronological permutation of the labels when every label is a month name.

    Returns None (keep insertion order) when any label is not a month.
    """
    positions = [month_position(label) for label in labels]
    if not labels or any(p is None for p in positions):
        return None
    return sorted(range(len(labels)), key=lambda i: positions[i])


def _reorder(values: List[Any], order: Optional[List[int]]) -> List[Any]:
    return values if order is None else [values[i] for i in order]


def _aggregated_series(rows, structure) -> Tuple[str, str, List[str], List[float]]:
    category_column = find_category_column(structure)
    value_column = find_value_column(structure)
    labels, values = aggregate_by_category(rows, category_column, value_column)
    order = month_order(labels)
    return category_column, value_column, _reorder(labels, order), _reorder(values, order)


def _secondary_category(
    rows: List[Dict[str, Any]],
    summary: ColumnSummary,
    category_column: str,
    settings: Settings,
) -> Optional[str]:
    for column in summary.category_candidates:
        if column != category_column and unique_count(rows, column) <= settings.max_series:
            return column
    return None


def generate_bar_config(rows, structure, summary, settings) -> ChartConfig:
    category_column = find_category_column(structure)
    value_column = find_value_column(structure)
    group_column = _secondary_category(rows, summary, category_column, settings)

    if group_column is None:
        _, _, labels, values = _aggregated_series(rows, structure)
        datasets = [Series(
            label=value_column,
            data=values,
            background_color=generate_colors(len(values)),
            border_color=CATEGORICAL_PALETTE[0],
            border_width=1,
        )]
    else:
        labels, grouped = aggregate_by_group(rows, category_column, group_column, value_column)
        order = month_order(labels)
        labels = _reorder(labels, order)
        colors = generate_colors(len(grouped))
        datasets = [
            Series(
                label=group,
                data=_reorder(values, order),
                background_color=colors[i],
                border_color=colors[i],
                border_width=1,
            )
            for i, (group, values) in enumerate(grouped.items())
        ]

    return CartesianChartConfig(
        type=ChartType.BAR,
        data=SeriesData(labels=labels, datasets=datasets),
        options=ChartOptions(
            title=_title(chart_text("by", settings.language, value=value_column, category=category_column)),
            legend=LegendOptions(display=True),
            scales={"y": AxisOptions(begin_at_zero=True)},
        ),
    )


def generate_line_config(rows, structure, summary, settings) -> ChartConfig:
    _, value_column, labels, values = _aggregated_series(rows, structure)

    return CartesianChartConfig(
        type=ChartType.LINE,
        data=SeriesData(labels=labels, datasets=[Series(
            label=value_column,
            data=values,
            border_color='#1f77b4',
            background_color='rgba(31, 119, 180, 0.1)',
            border_width=2,
            fill=True,
            tension=0.1,
        )]),
        options=ChartOptions(
            title=_title(chart_text("over_time", settings.language, value=value_column)),
            legend=LegendOptions(display=True),
            scales={"y": AxisOptions(begin_at_zero=True)},
        ),
    )


def generate_area_config(rows, structure, summary, settings) -> ChartConfig:
    _, value_column, labels, values = _aggregated_series(rows, structure)

    return CartesianChartConfig(
        type=ChartType.AREA,
        data=SeriesData(labels=labels, datasets=[Series(
            label=value_column,
            data=values,
            border_color='#2ca02c',
            background_color='rgba(44, 160, 44, 0.3)',
            border_width=2,
            fill=True,
            tension=0.1,
        )]),
        options=ChartOptions(
            title=_title(chart_text("volume_over_time", settings.language, value=value_column)),
            legend=LegendOptions(display=True),
            scales={"y": AxisOptions(begin_at_zero=True)},
        ),
    )


def generate_pie_config(rows, structure, summary, settings) -> ChartConfig:
    _, value_column, labels, values = _aggregated_series(rows, structure)

    return PieChartConfig(
        type=ChartType.PIE,
        data=SeriesData(labels=labels, datasets=[Series(
            label=value_column,
            data=values,
            background_color=generate_colors(len(values)),
            border_color='#ffffff',
            border_width=2,
        )]),
        options=ChartOptions(
            title=_title(chart_text("distribution", settings.language, value=value_column)),
            legend=LegendOptions(display=True, position="bottom"),
        ),
    )


def generate_horizontal_bar_config(rows, structure, summary, settings) -> ChartConfig:
    category_column, value_column, labels, values = _aggregated_series(rows, structure)

    return CartesianChartConfig(
        type=ChartType.HORIZONTAL_BAR,
        data=SeriesData(labels=labels, datasets=[Series(
            label=value_column,
            data=values,
            background_color=generate_colors(len(values)),
            border_color='#ff7f0e',
            border_width=1,
        )]),
        options=ChartOptions(
            title=_title(chart_text("by", settings.language, value=value_column, category=category_column)),
            legend=LegendOptions(display=True),
            index_axis="y",
            scales={"x": AxisOptions(begin_at_zero=True)},
        ),
    )


def generate_scatter_config(rows, structure, summary, settings) -> ChartConfig:
    numeric_columns = [c for c, t in structure.column_types.items() if t == ColumnType.NUMBER]

    if len(numeric_columns) < 2:
        logger.debug("Scatter requested with fewer than two numeric columns, building a bar chart")
        return generate_bar_config(rows, structure, summary, settings)

    x_column, y_column = numeric_columns[0], numeric_columns[1]
    points = [Point(x=to_number(row.get(x_column)), y=to_number(row.get(y_column))) for row in rows]

    return ScatterChartConfig(
        type=ChartType.SCATTER,
        data=PointData(labels=[], datasets=[PointSeries(
            label=f"{y_column} vs {x_column}",
            data=points,
            background_color='#9467bd',
            border_color='#9467bd',
            point_radius=6,
            point_hover_radius=8,
        )]),
        options=ChartOptions(
            title=_title(chart_text("correlation", settings.language, x=x_column, y=y_column)),
            legend=LegendOptions(display=True),
            scales={
                "x": AxisOptions(title=x_column),
                "y": AxisOptions(title=y_column),
            },
        ),
    )


def _table_cell(value: Any) -> Any:
    # JSON numbers like 1e400 decode to inf, which has no JSON form
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def generate_table_config(rows, structure, summary, settings) -> ChartConfig:
    columns = list(rows[0].keys()) if rows else []

    return TableChartConfig(
        type=ChartType.TABLE,
        data=GridData(
            columns=columns,
            rows=[[_table_cell(row.get(c)) for c in columns] for row in rows],
        ),
        options=ChartOptions(
            title=_title(chart_text("table", settings.language)),
            legend=LegendOptions(display=False),
        ),
    )


def generate_map_config(rows, structure, summary, settings) -> ChartConfig:
    category_column, value_column, labels, values = _aggregated_series(rows, structure)

    return CartesianChartConfig(
        type=ChartType.MAP,
        data=SeriesData(labels=labels, datasets=[Series(
            label=value_column,
            data=values,
            background_color=generate_colors(len(values)),
        )]),
        options=ChartOptions(
            title=_title(chart_text("by", settings.language, value=value_column, category=category_column)),
            legend=LegendOptions(display=False),
        ),
    )


BUILDERS: Dict[ChartType, Callable[..., ChartConfig]] = {
    ChartType.BAR: generate_bar_config,
    ChartType.LINE: generate_line_config,
    ChartType.PIE: generate_pie_config,
    ChartType.AREA: generate_area_config,
    ChartType.SCATTER: generate_scatter_config,
    ChartType.HORIZONTAL_BAR: generate_horizontal_bar_config,
    ChartType.TABLE: generate_table_config,
    ChartType.MAP: generate_map_config,
}


def build_chart_config(
    chart_type: ChartType,
    rows: List[Dict[str, Any]],
    structure: DataStructure,
    summary: ColumnSummary,
    settings: Optional[Settings] = None,
) -> ChartConfig:
    """
    Build the chart configuration for one chart type.

    Args:
        chart_type: Chart type to build
        rows: Dataset rows (never modified)
        structure: Structure snapshot of the same rows
        summary: Column roles of the same rows
        settings: Engine settings (language, grouping limits)

    Returns:
        A fresh chart configuration
    """
    settings = settings or get_settings()
    return BUILDERS[chart_type](rows, structure, summary, settings)
