from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Annotated, List, Optional, Any, Dict, Literal, Union


class ColumnType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"


class ChartType(str, Enum):
    BAR = "bar"
    LINE = "line"
    PIE = "pie"
    AREA = "area"
    SCATTER = "scatter"
    HORIZONTAL_BAR = "horizontal_bar"
    TABLE = "table"
    MAP = "map"


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class DataStructure(FrozenModel):
    has_time_series: bool = False
    has_categories: bool = False
    has_numerical_comparison: bool = False
    has_geographic_data: bool = False
    column_types: Dict[str, ColumnType] = {}  # keys follow the first row's key order
    row_count: int = 0
    column_count: int = 0


class ColumnSummary(FrozenModel):
    string_columns: List[str] = []
    number_columns: List[str] = []
    date_like_columns: List[str] = []
    category_candidates: List[str] = []
    primary_category: Optional[str] = None
    category_unique_count: int = 0


# Chart display options. Anything a renderer would compute with a callback
# (tick labels, tooltip text) is described as data instead.

class AxisTicks(FrozenModel):
    suffix: Optional[str] = None


class AxisOptions(FrozenModel):
    type: Optional[str] = None  # 'linear', 'category'
    position: Optional[str] = None  # 'left', 'right'
    begin_at_zero: Optional[bool] = None
    stacked: Optional[bool] = None
    max: Optional[float] = None
    draw_grid: Optional[bool] = None
    title: Optional[str] = None
    ticks: Optional[AxisTicks] = None


class TitleOptions(FrozenModel):
    display: bool = True
    text: str


class LegendOptions(FrozenModel):
    display: bool = True
    position: Optional[str] = None


class TooltipOptions(FrozenModel):
    label_template: str  # placeholders: {series}, {label}, {value}


class ChartOptions(FrozenModel):
    responsive: bool = True
    title: TitleOptions
    legend: LegendOptions = LegendOptions()
    tooltip: Optional[TooltipOptions] = None
    index_axis: Optional[str] = None  # 'y' turns bars horizontal
    scales: Dict[str, AxisOptions] = {}


class KpiCard(FrozenModel):
    type: str  # 'growth'
    title: str
    value: str
    delta: Optional[float] = None
    delta_percent: Optional[float] = None
    direction: Optional[Literal["up", "down"]] = None


class ChartMeta(FrozenModel):
    cards: List[KpiCard] = []
    narrative: Optional[str] = None


class Series(FrozenModel):
    label: str
    data: List[Optional[float]]
    background_color: Optional[Union[str, List[str]]] = None
    border_color: Optional[str] = None
    border_width: Optional[int] = None
    fill: Optional[bool] = None
    tension: Optional[float] = None
    y_axis_id: Optional[str] = None


class SeriesData(FrozenModel):
    labels: List[str]
    datasets: List[Series]


class Point(FrozenModel):
    x: float
    y: float


class PointSeries(FrozenModel):
    label: str
    data: List[Point]
    background_color: Optional[str] = None
    border_color: Optional[str] = None
    point_radius: Optional[int] = None
    point_hover_radius: Optional[int] = None


class PointData(FrozenModel):
    labels: List[str] = []
    datasets: List[PointSeries]


class GridData(FrozenModel):
    columns: List[str]
    rows: List[List[Any]]


class CartesianChartConfig(FrozenModel):
    type: Literal[ChartType.BAR, ChartType.LINE, ChartType.AREA, ChartType.HORIZONTAL_BAR, ChartType.MAP]
    data: SeriesData
    options: ChartOptions
    meta: Optional[ChartMeta] = None


class PieChartConfig(FrozenModel):
    type: Literal[ChartType.PIE]
    data: SeriesData
    options: ChartOptions
    meta: Optional[ChartMeta] = None


class ScatterChartConfig(FrozenModel):
    type: Literal[ChartType.SCATTER]
    data: PointData
    options: ChartOptions
    meta: Optional[ChartMeta] = None


class TableChartConfig(FrozenModel):
    type: Literal[ChartType.TABLE]
    data: GridData
    options: ChartOptions
    meta: Optional[ChartMeta] = None


ChartConfig = Annotated[
    Union[CartesianChartConfig, PieChartConfig, ScatterChartConfig, TableChartConfig],
    Field(discriminator="type"),
]


class ChartSuggestion(FrozenModel):
    type: ChartType
    title: str
    description: str
    confidence: float = Field(ge=0.0, le=1.0)
    config: ChartConfig
    reasoning: str


class SuggestRequest(BaseModel):
    data: Any = None  # validated by the route so a non-list gets our own error body
    question: Optional[str] = None


class SuggestResponse(BaseModel):
    success: bool = True
    suggestions: List[ChartSuggestion]
