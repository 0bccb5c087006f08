"""
Suggestion scoring and ranking.

Scores each candidate chart by how well it matches the dataset signals
and the question, wraps it with user-facing text and keeps the best ones.
"""
import logging
from typing import List

from dashboard_core.core.keywords import QuestionIntents
from dashboard_core.core.messages import DEFAULT_LANGUAGE, reasoning_variant, suggestion_text
from dashboard_core.core.schemas import ChartConfig, ChartSuggestion, ChartType, DataStructure

logger = logging.getLogger(__name__)

BASE_CONFIDENCE = 0.5


def calculate_confidence(chart_type: ChartType, structure: DataStructure, intents: QuestionIntents) -> float:
    """Base 0.5 plus data-shape and keyword bonuses, clamped to [0, 1]."""
    confidence = BASE_CONFIDENCE

    # Data structure match
    if chart_type == ChartType.BAR and structure.has_categories:
        confidence += 0.25
    if chart_type == ChartType.LINE and structure.has_time_series:
        confidence += 0.35
    if chart_type == ChartType.AREA and structure.has_time_series:
        confidence += 0.3
    if chart_type == ChartType.PIE and structure.has_categories:
        confidence += 0.2
    if chart_type == ChartType.SCATTER and structure.has_numerical_comparison:
        confidence += 0.3
    if chart_type == ChartType.HORIZONTAL_BAR and structure.has_categories:
        confidence += 0.2
    if chart_type == ChartType.MAP and structure.has_geographic_data:
        confidence += 0.3

    # Question keywords
    temporal_question = intents.period or intents.growth
    if chart_type == ChartType.LINE and temporal_question:
        confidence += 0.25
    if chart_type == ChartType.AREA and temporal_question:
        confidence += 0.2
    if chart_type == ChartType.HORIZONTAL_BAR and intents.ranking:
        confidence += 0.25
    if chart_type == ChartType.PIE and intents.proportion:
        confidence += 0.2

    return round(min(max(confidence, 0.0), 1.0), 4)


def generate_reasoning(chart_type: ChartType, intents: QuestionIntents, language: str = DEFAULT_LANGUAGE) -> str:
    if chart_type == ChartType.BAR and intents.region:
        return reasoning_variant("bar_region", language)
    if chart_type == ChartType.LINE and (intents.growth or intents.period):
        return reasoning_variant("line_growth", language)
    return suggestion_text(chart_type, language)["reasoning"]


def create_chart_suggestion(
    chart_type: ChartType,
    config: ChartConfig,
    structure: DataStructure,
    intents: QuestionIntents,
    language: str = DEFAULT_LANGUAGE,
) -> ChartSuggestion:
    text = suggestion_text(chart_type, language)
    return ChartSuggestion(
        type=chart_type,
        title=text["title"],
        description=text["description"],
        confidence=calculate_confidence(chart_type, structure, intents),
        config=config,
        reasoning=generate_reasoning(chart_type, intents, language),
    )


def rank_suggestions(suggestions: List[ChartSuggestion], limit: int = 3) -> List[ChartSuggestion]:
    """
    Sort by confidence (highest first) and keep the top ``limit``.

    The sort is stable, so equal scores keep their selection order.
    """
    ranked = sorted(suggestions, key=lambda s: s.confidence, reverse=True)
    return ranked[:limit]
