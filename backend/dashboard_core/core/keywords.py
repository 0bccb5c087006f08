"""
Question keyword groups.

The words that turn a free-text question into chart intents live here as
data, so new phrasings or languages can be added without touching the
selection rules. A JSON file (``KEYWORDS_FILE``) may replace any group.
"""
import json
import logging
from dataclasses import dataclass
from typing import List, Optional
from pydantic import BaseModel, field_validator

logger = logging.getLogger(__name__)


class IntentKeywords(BaseModel):
    """Keyword groups matched as lower-case substrings of the question."""

    growth: List[str] = [
        "crescimento", "variação", "variacao", "evolução", "evolucao", "aumento",
        "queda", "diferença", "diferenca", "comparar mês", "comparar mes",
        "growth", "increase", "decrease", "decline", "variation", "evolution",
        "month over month",
    ]
    trend: List[str] = [
        "tendência", "tendencia", "ao longo", "timeline", "trend", "over time",
    ]
    distribution: List[str] = [
        "proporção", "proporcao", "distribuição", "distribuicao", "percentual",
        "participação", "participacao", "proportion", "distribution",
        "percentage", "share", "breakdown",
    ]
    ranking: List[str] = [
        "top", "ranking", "maiores", "menores", "ordenar", "largest", "smallest",
        "highest", "lowest", "biggest", "rank",
    ]
    correlation: List[str] = [
        "correlação", "correlacao", "relação", "relacao", "impacto", "influência",
        "influencia", "correlation", "relationship", "impact", "influence",
    ]
    period: List[str] = ["mês", "month"]
    proportion: List[str] = ["propor", "percent"]
    region: List[str] = ["região", "regiao", "region"]

    @field_validator("*")
    @classmethod
    def lowercase_keywords(cls, v: List[str]) -> List[str]:
        return [k.lower() for k in v if k and k.strip()]


@dataclass(frozen=True)
class QuestionIntents:
    growth: bool = False
    trend: bool = False
    distribution: bool = False
    ranking: bool = False
    correlation: bool = False
    period: bool = False
    proportion: bool = False
    region: bool = False


def _mentions(question: str, keywords: List[str]) -> bool:
    return any(k in question for k in keywords)


def detect_intents(question: Optional[str], keywords: IntentKeywords) -> QuestionIntents:
    """Match every keyword group against the lower-cased question."""
    text = (question or "").lower()
    if not text:
        return QuestionIntents()

    return QuestionIntents(
        growth=_mentions(text, keywords.growth),
        trend=_mentions(text, keywords.trend),
        distribution=_mentions(text, keywords.distribution),
        ranking=_mentions(text, keywords.ranking),
        correlation=_mentions(text, keywords.correlation),
        period=_mentions(text, keywords.period),
        proportion=_mentions(text, keywords.proportion),
        region=_mentions(text, keywords.region),
    )


def load_keywords(path: Optional[str] = None) -> IntentKeywords:
    """
    Load keyword groups, optionally overriding defaults from a JSON file.

    The file holds an object whose keys are group names (``growth``,
    ``trend``...) and whose values are lists of keywords. Groups missing
    from the file keep their defaults.

    Raises:
        ValueError: If the file is not a JSON object of keyword lists
    """
    if not path:
        return IntentKeywords()

    with open(path, encoding="utf-8") as f:
        try:
            overrides = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"KEYWORDS_FILE {path} is not valid JSON: {e}") from e

    if not isinstance(overrides, dict):
        raise ValueError(f"KEYWORDS_FILE {path} must contain a JSON object")

    unknown = set(overrides) - set(IntentKeywords.model_fields)
    if unknown:
        logger.warning(f"Ignoring unknown keyword groups in {path}: {sorted(unknown)}")

    merged = IntentKeywords().model_dump()
    merged.update({k: v for k, v in overrides.items() if k in IntentKeywords.model_fields})
    logger.info(f"Loaded keyword overrides from {path}")
    return IntentKeywords(**merged)
