"""
Chart suggestion service.

Entry point of the engine: analyzes a dataset once, selects candidate
chart types, builds and enriches a configuration for each candidate and
returns the best-scored suggestions.
"""
import logging
from typing import Any, Dict, List, Optional

from dashboard_core.core.config import Settings, get_settings
from dashboard_core.core.keywords import detect_intents
from dashboard_core.core.sanitization import sanitize_for_logging
from dashboard_core.core.schemas import ChartSuggestion, ChartType
from dashboard_core.services.analyzer import analyze_data_structure, summarize_columns
from dashboard_core.services.enrichment import apply_growth_enrichment, apply_percent_of_total, attach_narrative
from dashboard_core.services.generator import build_chart_config
from dashboard_core.services.ranker import create_chart_suggestion, rank_suggestions
from dashboard_core.services.selector import build_signals, select_chart_types

logger = logging.getLogger(__name__)

GROWTH_CHART_TYPES = (ChartType.LINE, ChartType.AREA)


def suggest_charts(
    rows: List[Dict[str, Any]],
    question: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> List[ChartSuggestion]:
    """
    Recommend chart visualizations for a dataset.

    The result depends only on the rows, the question and the settings;
    nothing is cached or kept between calls and the rows are not modified.

    Args:
        rows: Dataset rows; columns are taken from the first row
        question: Optional free-text question about the data
        settings: Engine settings, defaults to the application settings

    Returns:
        Up to ``settings.max_suggestions`` suggestions, highest confidence first
    """
    settings = settings or get_settings()
    rows = list(rows or [])

    structure = analyze_data_structure(rows, settings)
    summary = summarize_columns(rows, structure, settings)
    intents = detect_intents(question, settings.keywords)
    signals = build_signals(structure, summary, question)

    chart_types = select_chart_types(signals, intents, settings)

    suggestions = []
    for chart_type in chart_types:
        config = build_chart_config(chart_type, rows, structure, summary, settings)

        if intents.distribution:
            config = apply_percent_of_total(config)

        if (intents.growth or intents.trend) and signals.has_time and chart_type in GROWTH_CHART_TYPES:
            config = apply_growth_enrichment(config, settings.language)

        config = attach_narrative(config, rows, settings.language)

        suggestions.append(create_chart_suggestion(chart_type, config, structure, intents, settings.language))

    ranked = rank_suggestions(suggestions, settings.max_suggestions)
    logger.info(
        f"Generated {len(ranked)} chart suggestions from {len(chart_types)} candidates "
        f"for {structure.row_count} rows (question: '{sanitize_for_logging(question or '')}')"
    )
    return ranked
