from .base import LLMBaseAgent
from .utils import distinct_values, parse_amount, round_half_up
from .data_store import SalesDataStore, parse_csv_line
from .filter_engine import SalesFilter, ProductFilter
from .aggregation_engine import AggregationEngine
from .intents import (
    Intent,
    SalesDataParams,
    LocationAnalysisParams,
    PerformanceAnalysisParams,
    AnalyticsParams,
    ProductInsightParams,
)
from .query_classifier import QueryClassifier, is_sales_related
from .analytics import SalesAnalytics
from .sales_analyst_bot import SalesAnalystBot
from .chat_service import SalesChatService

__all__ = [
    "LLMBaseAgent",
    "distinct_values",
    "parse_amount",
    "round_half_up",
    "SalesDataStore",
    "parse_csv_line",
    "SalesFilter",
    "ProductFilter",
    "AggregationEngine",
    "Intent",
    "SalesDataParams",
    "LocationAnalysisParams",
    "PerformanceAnalysisParams",
    "AnalyticsParams",
    "ProductInsightParams",
    "QueryClassifier",
    "is_sales_related",
    "SalesAnalytics",
    "SalesAnalystBot",
    "SalesChatService",
]
