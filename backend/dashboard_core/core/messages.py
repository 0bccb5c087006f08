"""
User-facing text for suggestions, chart titles and narratives.

Every table is keyed by language and, for suggestion text, by every
ChartType member; ``tests/test_messages.py`` fails when a chart type or a
language is missing an entry.
"""
from typing import Dict
from dashboard_core.core.schemas import ChartType

DEFAULT_LANGUAGE = "en"

SUGGESTION_TEXT: Dict[str, Dict[ChartType, Dict[str, str]]] = {
    "en": {
        ChartType.BAR: {
            "title": "Bar Chart",
            "description": "Ideal for comparing values across categories",
            "reasoning": "A bar chart is perfect for comparing values across categories",
        },
        ChartType.LINE: {
            "title": "Line Chart",
            "description": "Perfect for showing trends over time",
            "reasoning": "A line chart is ideal for showing trends over time",
        },
        ChartType.PIE: {
            "title": "Pie Chart",
            "description": "Great for showing the parts of a whole",
            "reasoning": "A pie chart shows the share of each category in the total",
        },
        ChartType.AREA: {
            "title": "Area Chart",
            "description": "Good for showing volume and trends",
            "reasoning": "An area chart highlights accumulated volume and evolution over time",
        },
        ChartType.SCATTER: {
            "title": "Scatter Plot",
            "description": "Ideal for correlating two numeric variables",
            "reasoning": "A scatter plot helps visualize correlations between numeric variables",
        },
        ChartType.HORIZONTAL_BAR: {
            "title": "Horizontal Bar Chart",
            "description": "Good for rankings and comparisons",
            "reasoning": "A horizontal bar chart is ideal for rankings and comparisons",
        },
        ChartType.TABLE: {
            "title": "Table",
            "description": "Presents all the data in an organized way",
            "reasoning": "A table keeps every value visible when no chart shape stands out",
        },
        ChartType.MAP: {
            "title": "Map",
            "description": "Ideal for geographic data",
            "reasoning": "A map places each value on its geographic area",
        },
    },
    "pt": {
        ChartType.BAR: {
            "title": "Gráfico de Barras",
            "description": "Ideal para comparar valores entre categorias",
            "reasoning": "Gráfico de barras é perfeito para comparar valores entre categorias",
        },
        ChartType.LINE: {
            "title": "Gráfico de Linha",
            "description": "Perfeito para mostrar tendências ao longo do tempo",
            "reasoning": "Gráfico de linha é ideal para mostrar tendências ao longo do tempo",
        },
        ChartType.PIE: {
            "title": "Gráfico de Pizza",
            "description": "Ótimo para mostrar proporções de um todo",
            "reasoning": "Gráfico de pizza mostra a proporção de cada categoria no total",
        },
        ChartType.AREA: {
            "title": "Gráfico de Área",
            "description": "Bom para mostrar volume e tendências",
            "reasoning": "Gráfico de área destaca volume acumulado e evolução temporal",
        },
        ChartType.SCATTER: {
            "title": "Gráfico de Dispersão",
            "description": "Ideal para correlacionar duas variáveis numéricas",
            "reasoning": "Gráfico de dispersão ajuda a visualizar correlações entre variáveis numéricas",
        },
        ChartType.HORIZONTAL_BAR: {
            "title": "Gráfico de Barras Horizontal",
            "description": "Bom para rankings e comparações",
            "reasoning": "Gráfico de barras horizontal é ideal para rankings e comparações",
        },
        ChartType.TABLE: {
            "title": "Tabela",
            "description": "Apresenta todos os dados de forma organizada",
            "reasoning": "Este tipo de visualização é adequado para os dados analisados",
        },
        ChartType.MAP: {
            "title": "Mapa",
            "description": "Ideal para dados geográficos",
            "reasoning": "Mapa posiciona cada valor em sua área geográfica",
        },
    },
}

REASONING_VARIANTS: Dict[str, Dict[str, str]] = {
    "en": {
        "bar_region": "A bar chart is ideal for comparing sales across different regions",
        "line_growth": "A line chart highlights growth and trends between months",
    },
    "pt": {
        "bar_region": "Gráfico de barras é ideal para comparar vendas entre diferentes regiões",
        "line_growth": "Gráfico de linha evidencia crescimento e tendências entre meses",
    },
}

CHART_TEXT: Dict[str, Dict[str, str]] = {
    "en": {
        "by": "{value} by {category}",
        "over_time": "{value} over time",
        "volume_over_time": "{value} - volume over time",
        "distribution": "Distribution of {value}",
        "correlation": "Correlation: {y} vs {x}",
        "table": "Data table",
        "growth_series": "Growth %",
        "growth_card": "Growth {previous}→{last}",
        "narrative_points": "Total data points analysed: {count}.",
        "narrative_labels": "Categories/periods: {count}.",
        "narrative_stats": "Mean: {mean}; Max: {max} ({max_label}); Min: {min} ({min_label}).",
        "narrative_series": "Compared {count} series (e.g. {first} vs {second}).",
        "narrative_growth": "Recent change: {value}.",
        "narrative_records": "Total records: {count}.",
    },
    "pt": {
        "by": "{value} por {category}",
        "over_time": "{value} ao longo do tempo",
        "volume_over_time": "{value} - Volume ao longo do tempo",
        "distribution": "Distribuição de {value}",
        "correlation": "Correlação: {y} vs {x}",
        "table": "Tabela de Dados",
        "growth_series": "Crescimento %",
        "growth_card": "Crescimento {previous}→{last}",
        "narrative_points": "Total de pontos analisados: {count}.",
        "narrative_labels": "Categorias/Períodos: {count}.",
        "narrative_stats": "Média: {mean}; Máx: {max} ({max_label}); Mín: {min} ({min_label}).",
        "narrative_series": "Foram comparadas {count} séries (ex.: {first} vs {second}).",
        "narrative_growth": "Variação recente: {value}.",
        "narrative_records": "Total de registros: {count}.",
    },
}


def _language(language: str) -> str:
    return language if language in SUGGESTION_TEXT else DEFAULT_LANGUAGE


def suggestion_text(chart_type: ChartType, language: str = DEFAULT_LANGUAGE) -> Dict[str, str]:
    """Title, description and default reasoning for a chart type."""
    return SUGGESTION_TEXT[_language(language)][chart_type]


def reasoning_variant(key: str, language: str = DEFAULT_LANGUAGE) -> str:
    return REASONING_VARIANTS[_language(language)][key]


def chart_text(key: str, language: str = DEFAULT_LANGUAGE, **values) -> str:
    """Format a chart title or narrative sentence."""
    return CHART_TEXT[_language(language)][key].format(**values)
