"""
Chart type selection.

Maps dataset signals and question intents to an ordered list of candidate
chart types. Rules append candidates independently; the result is
deduplicated keeping the first position of each type, and that order is
what ties are broken by when suggestions are ranked.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

from dashboard_core.core.config import Settings, get_settings
from dashboard_core.core.keywords import QuestionIntents
from dashboard_core.core.schemas import ChartType, ColumnSummary, DataStructure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionSignals:
    has_category: bool
    category_unique_count: int
    has_time: bool
    has_two_numbers: bool
    has_two_categories: bool


def mentioned_columns(structure: DataStructure, question: Optional[str]) -> List[str]:
    """Column names (lower-cased) that appear verbatim in the question."""
    text = (question or "").lower()
    if not text:
        return []
    return [c.lower() for c in structure.column_types if c.lower() in text]


def build_signals(structure: DataStructure, summary: ColumnSummary, question: Optional[str] = None) -> SelectionSignals:
    mentioned = set(mentioned_columns(structure, question))
    has_two_categories = (
        len(summary.category_candidates) >= 2
        or (len(mentioned) >= 2 and len(summary.string_columns) >= 2)
    )

    return SelectionSignals(
        has_category=bool(summary.category_candidates or summary.string_columns),
        category_unique_count=summary.category_unique_count,
        has_time=structure.has_time_series or bool(summary.date_like_columns),
        has_two_numbers=len(summary.number_columns) >= 2,
        has_two_categories=has_two_categories,
    )


def select_chart_types(
    signals: SelectionSignals,
    intents: QuestionIntents,
    settings: Optional[Settings] = None,
) -> List[ChartType]:
    """
    Return candidate chart types in emission order, without duplicates.

    Never returns an empty list: with nothing to go on, a table and a bar
    chart are offered.
    """
    settings = settings or get_settings()
    temporal = signals.has_time or intents.trend or intents.growth
    few_categories = signals.category_unique_count <= settings.pie_max_categories
    candidates: List[ChartType] = []

    # Two dimensions compared at once, e.g. "by product and region"
    if signals.has_two_categories:
        candidates.append(ChartType.LINE if temporal else ChartType.BAR)

    if temporal:
        candidates.extend([ChartType.LINE, ChartType.AREA])

    if signals.has_category and signals.category_unique_count >= 1 and few_categories and intents.distribution:
        candidates.append(ChartType.PIE)

    if intents.ranking and signals.has_category:
        candidates.append(ChartType.HORIZONTAL_BAR)

    if signals.has_two_numbers and intents.correlation:
        candidates.append(ChartType.SCATTER)

    if signals.has_category:
        if few_categories and not intents.trend and not signals.has_time:
            candidates.extend([ChartType.PIE, ChartType.BAR])
        else:
            candidates.append(ChartType.BAR)

    if not signals.has_category and signals.has_two_numbers:
        candidates.append(ChartType.SCATTER)

    if not candidates:
        candidates.extend([ChartType.TABLE, ChartType.BAR])

    selected = list(dict.fromkeys(candidates))
    logger.debug(f"Selected chart types: {[c.value for c in selected]}")
    return selected
