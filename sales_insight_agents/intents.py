"""
Intent types produced by the query classifier.

Each aggregation entry point has its own params dataclass, so a handler only
ever sees the fields relevant to it. `to_dict()` gives the camelCase form
used in API payloads and suggestion text.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Union

from .filter_engine import ProductFilter, SalesFilter

GET_SALES_DATA = 'getSalesData'
GET_SALES_ANALYTICS = 'getSalesAnalytics'
GET_PRODUCT_INSIGHTS = 'getProductInsights'


def _present(**values) -> Dict:
    return {k: v for k, v in values.items() if v is not None}


@dataclass
class SalesDataParams:
    state: Optional[str] = None
    region: Optional[str] = None
    category: Optional[str] = None
    date_range: Optional[str] = None

    def sales_filter(self) -> SalesFilter:
        return SalesFilter(state=self.state, region=self.region,
                           category=self.category, date_range=self.date_range)

    def fallback_filter(self) -> SalesFilter:
        return self.sales_filter()

    def to_dict(self) -> Dict:
        return _present(state=self.state, region=self.region,
                        category=self.category, dateRange=self.date_range)


@dataclass
class LocationAnalysisParams:
    dimension: Optional[str] = None
    performance_filter: Optional[str] = None
    filters: SalesFilter = field(default_factory=SalesFilter)
    analysis_type: str = 'location_analysis'

    def fallback_filter(self) -> SalesFilter:
        return self.filters

    def to_dict(self) -> Dict:
        return _present(analysisType=self.analysis_type, dimension=self.dimension,
                        performanceFilter=self.performance_filter)


@dataclass
class PerformanceAnalysisParams:
    performance_type: str = 'overall'
    sort_order: Optional[str] = None
    dimension: str = 'overall'
    filters: SalesFilter = field(default_factory=SalesFilter)
    analysis_type: str = 'performance_analysis'

    def fallback_filter(self) -> SalesFilter:
        return self.filters

    def to_dict(self) -> Dict:
        return _present(analysisType=self.analysis_type, performanceType=self.performance_type,
                        sortOrder=self.sort_order, dimension=self.dimension)


@dataclass
class AnalyticsParams:
    """Keyword analytics: trends, comparison or performance over a dimension."""

    analysis_type: Optional[str] = None
    dimension: Optional[str] = None
    filters: SalesFilter = field(default_factory=SalesFilter)

    def fallback_filter(self) -> SalesFilter:
        return self.filters

    def to_dict(self) -> Dict:
        return _present(analysisType=self.analysis_type, dimension=self.dimension)


@dataclass
class ProductInsightParams:
    insight_type: Optional[str] = None
    category: Optional[str] = None
    product_name: Optional[str] = None

    def product_filter(self) -> ProductFilter:
        return ProductFilter(product_name=self.product_name, category=self.category)

    def fallback_filter(self) -> SalesFilter:
        return SalesFilter(category=self.category)

    def to_dict(self) -> Dict:
        return _present(insightType=self.insight_type, category=self.category,
                        productName=self.product_name)


AnalysisParams = Union[LocationAnalysisParams, PerformanceAnalysisParams, AnalyticsParams]
IntentParams = Union[SalesDataParams, AnalysisParams, ProductInsightParams]


@dataclass
class Intent:
    function_name: Optional[str]
    params: Optional[IntentParams] = None
    is_off_topic: bool = False

    @property
    def parameters(self) -> Dict:
        return self.params.to_dict() if self.params is not None else {}

    @classmethod
    def off_topic(cls) -> 'Intent':
        return cls(function_name=None, params=None, is_off_topic=True)
