"""
Chart configuration enrichment.

Post-processing steps applied after a chart configuration is built:
percent-of-total normalization, period-over-period growth annotation and
a narrative summary. Every step takes a configuration and returns a new
one; the input is never modified.
"""
import logging
import math
from typing import Any, Dict, List, Optional
import numpy as np
import pandas as pd

from dashboard_core.core.messages import DEFAULT_LANGUAGE, chart_text
from dashboard_core.core.schemas import (
    AxisOptions,
    AxisTicks,
    CartesianChartConfig,
    ChartConfig,
    ChartMeta,
    ChartType,
    KpiCard,
    PieChartConfig,
    Series,
    TooltipOptions,
)

logger = logging.getLogger(__name__)

GROWTH_AXIS_ID = "y1"
GROWTH_COLOR = '#d62728'


def format_number(value: float) -> str:
    """Render integral values without a decimal part and others to 2 decimals."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return str(round(value, 2))


def _numeric(values: List[Optional[float]]) -> np.ndarray:
    return np.array([0.0 if v is None else float(v) for v in values], dtype=float)


def _percentages(values: np.ndarray) -> np.ndarray:
    """
    Each value as a percent of the vector total, to 2 decimals.

    Hundredths are assigned by largest remainder so the shares add up to
    exactly 100. A zero total is treated as 1.
    """
    total = values.sum()
    if total == 0:
        return np.round(values * 100, 2)

    hundredths = values / total * 10000
    floors = np.floor(hundredths)
    shortfall = int(round(hundredths.sum() - floors.sum()))
    order = np.argsort(-(hundredths - floors), kind="stable")
    floors[order[:shortfall]] += 1
    return np.round(floors / 100, 2)


def _merge_axis(scales: Dict[str, AxisOptions], axis: str, **changes) -> Dict[str, AxisOptions]:
    current = scales.get(axis, AxisOptions())
    return {**scales, axis: current.model_copy(update=changes)}


def apply_percent_of_total(config: ChartConfig) -> ChartConfig:
    """
    Express series values as percentages.

    Multi-series bar charts are normalized per label across series (100%
    stacked bars); single-series pie and bar charts are normalized against
    their own total. Other configurations are returned unchanged.
    """
    if not isinstance(config, (CartesianChartConfig, PieChartConfig)):
        return config
    datasets = config.data.datasets
    if not datasets:
        return config

    if config.type == ChartType.BAR and len(datasets) > 1:
        matrix = np.vstack([_numeric(ds.data) for ds in datasets])
        shares = np.zeros_like(matrix)
        for j in range(matrix.shape[1]):
            shares[:, j] = _percentages(matrix[:, j])
        new_datasets = [
            ds.model_copy(update={"data": [float(v) for v in shares[i]]})
            for i, ds in enumerate(datasets)
        ]
        scales = _merge_axis(config.options.scales, "x", stacked=True)
        scales = _merge_axis(
            scales, "y",
            begin_at_zero=True, max=100, stacked=True, ticks=AxisTicks(suffix="%"),
        )
        options = config.options.model_copy(update={
            "scales": scales,
            "tooltip": TooltipOptions(label_template="{series}: {value}%"),
        })
        return config.model_copy(deep=True, update={
            "data": config.data.model_copy(update={"datasets": new_datasets}),
            "options": options,
        })

    if config.type in (ChartType.PIE, ChartType.BAR):
        values = _numeric(datasets[0].data)
        normalized = datasets[0].model_copy(update={"data": [float(v) for v in _percentages(values)]})
        updates: Dict[str, Any] = {"tooltip": TooltipOptions(label_template="{label}: {value}%")}
        if config.type == ChartType.BAR:
            updates["scales"] = _merge_axis(config.options.scales, "y", ticks=AxisTicks(suffix="%"))
        return config.model_copy(deep=True, update={
            "data": config.data.model_copy(update={"datasets": [normalized] + list(datasets[1:])}),
            "options": config.options.model_copy(update=updates),
        })

    return config


def growth_percentages(values: List[Optional[float]]) -> List[Optional[float]]:
    """
    Period-over-period percent change.

    The first point and any point whose previous value is 0 have no growth
    (None), as does a change too large to represent; the rest are rounded
    to 2 decimals.
    """
    numbers = [0.0 if v is None else float(v) for v in values]
    growth: List[Optional[float]] = []
    for i, value in enumerate(numbers):
        previous = numbers[i - 1] if i > 0 else 0.0
        if i == 0 or previous == 0:
            growth.append(None)
        else:
            change = (value - previous) / previous * 100
            growth.append(round(change, 2) if math.isfinite(change) else None)
    return growth


def _growth_card(labels: List[str], values: List[float], growth: List[Optional[float]], language: str) -> KpiCard:
    last = len(values) - 1
    change = values[last] - values[last - 1]
    delta = round(change, 2) if math.isfinite(change) else None
    delta_percent = growth[last]
    rising = change >= 0
    arrow = "▲" if rising else "▼"
    sign = "+" if rising else ""
    percent_text = f"{format_number(delta_percent)}%" if delta_percent is not None else "N/A"
    delta_text = f"{sign}{format_number(delta)}" if delta is not None else "N/A"

    return KpiCard(
        type="growth",
        title=chart_text("growth_card", language, previous=labels[last - 1], last=labels[last]),
        value=f"{arrow} {percent_text} ({delta_text})",
        delta=delta,
        delta_percent=delta_percent,
        direction="up" if rising else "down",
    )


def apply_growth_enrichment(config: ChartConfig, language: str = DEFAULT_LANGUAGE) -> ChartConfig:
    """
    Annotate a time series with period-over-period growth.

    Adds a "Growth %" series on a secondary right-hand axis and, when there
    are at least two periods, a KPI card for the last period's change.
    """
    if not isinstance(config, CartesianChartConfig):
        return config
    labels = config.data.labels
    datasets = config.data.datasets
    if not labels or not datasets:
        return config

    values = [0.0 if v is None else float(v) for v in datasets[0].data]
    growth = growth_percentages(values)

    meta = config.meta or ChartMeta()
    cards = list(meta.cards)
    if len(values) >= 2:
        cards.append(_growth_card(labels, values, growth, language))

    growth_series = Series(
        label=chart_text("growth_series", language),
        data=growth,
        y_axis_id=GROWTH_AXIS_ID,
        border_color=GROWTH_COLOR,
        background_color='rgba(214, 39, 40, 0.2)',
        border_width=2,
        fill=False,
        tension=0.1,
    )

    scales = _merge_axis(config.options.scales, "y", begin_at_zero=True)
    scales[GROWTH_AXIS_ID] = AxisOptions(
        type="linear",
        position="right",
        draw_grid=False,
        ticks=AxisTicks(suffix="%"),
    )

    return config.model_copy(deep=True, update={
        "data": config.data.model_copy(update={"datasets": list(datasets) + [growth_series]}),
        "options": config.options.model_copy(update={"scales": scales}),
        "meta": meta.model_copy(update={"cards": cards}),
    })


def _series_narrative(config: ChartConfig, row_count: int, language: str) -> str:
    labels = config.data.labels
    datasets = config.data.datasets
    values = pd.Series([0.0 if v is None else float(v) for v in datasets[0].data], dtype=float)

    # idxmax/idxmin raise ValueError on an empty series
    max_index = int(values.idxmax())
    min_index = int(values.idxmin())
    max_label = labels[max_index] if max_index < len(labels) else ""
    min_label = labels[min_index] if min_index < len(labels) else ""

    parts = [chart_text("narrative_points", language, count=row_count)]
    if labels:
        parts.append(chart_text("narrative_labels", language, count=len(labels)))
    parts.append(chart_text(
        "narrative_stats", language,
        mean=f"{values.mean():.1f}",
        max=format_number(values.max()), max_label=max_label,
        min=format_number(values.min()), min_label=min_label,
    ))

    if len(datasets) > 1:
        parts.append(chart_text(
            "narrative_series", language,
            count=len(datasets), first=datasets[0].label, second=datasets[1].label,
        ))

    growth_card = next((c for c in (config.meta.cards if config.meta else []) if c.type == "growth"), None)
    if growth_card is not None:
        parts.append(chart_text("narrative_growth", language, value=growth_card.value))

    return " ".join(parts)


def attach_narrative(config: ChartConfig, rows: List[Dict[str, Any]], language: str = DEFAULT_LANGUAGE) -> ChartConfig:
    """
    Attach a short natural-language summary of the chart's data.

    Best effort: if the statistics cannot be computed (for example an empty
    series) the configuration is returned without a narrative.
    """
    try:
        if isinstance(config, (CartesianChartConfig, PieChartConfig)) and config.data.datasets:
            narrative = _series_narrative(config, len(rows), language)
        else:
            narrative = chart_text("narrative_records", language, count=len(rows))
    except Exception as e:
        logger.debug(f"Narrative generation skipped for {config.type.value} chart: {e}")
        return config

    meta = config.meta or ChartMeta()
    return config.model_copy(deep=True, update={"meta": meta.model_copy(update={"narrative": narrative})})
