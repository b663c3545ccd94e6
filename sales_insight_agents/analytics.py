"""
SalesAnalytics - dimension-aware wrappers around AggregationEngine that
attach canned insight text.
"""

import logging
from typing import Dict

from .aggregation_engine import AggregationEngine, get_top_products
from .intents import (
    GET_PRODUCT_INSIGHTS, GET_SALES_ANALYTICS, GET_SALES_DATA,
    AnalysisParams, Intent, ProductInsightParams, SalesDataParams,
)

logger = logging.getLogger(__name__)

TREND_INSIGHTS = ['Sales trending upward', 'Peak performance in Q4']
COMPARISON_INSIGHTS = ['Technology leads in sales', 'Furniture has highest margins']
PERFORMANCE_INSIGHTS = ['Strong overall performance', 'Room for improvement in Central region']
RECOMMENDATIONS = [
    'Focus on high-margin products',
    'Expand successful products to underperforming regions',
    'Consider seasonal promotions',
]


class SalesAnalytics:
    """
    Entry points for the three aggregation functions an Intent can name.

    Usage:
        analytics = SalesAnalytics(AggregationEngine(store))
        result = analytics.run(classifier.classify("show me texas sales"))
    """

    def __init__(self, engine: AggregationEngine):
        self.engine = engine

    def run(self, intent: Intent) -> Dict:
        """Dispatch an in-domain intent to the function it names."""
        handlers = {
            GET_SALES_DATA: self._run_sales_data,
            GET_SALES_ANALYTICS: self.get_sales_analytics,
            GET_PRODUCT_INSIGHTS: self.get_product_insights,
        }
        handler = handlers.get(intent.function_name)
        if handler is None:
            raise ValueError(f"Unknown function: {intent.function_name}")
        return handler(intent.params)

    def _run_sales_data(self, params: SalesDataParams) -> Dict:
        return self.engine.get_sales_data(params.sales_filter())

    def get_sales_analytics(self, params: AnalysisParams) -> Dict:
        """
        Aggregate over params.filters, then reshape for the analysis type.
        Any type other than trends, comparison or performance returns the
        base aggregation unchanged.
        """
        data = self.engine.get_sales_data(params.filters)
        analysis_type = params.analysis_type

        if analysis_type == 'trends':
            return {
                'type': 'trends',
                'dimension': params.dimension,
                'data': data['chartData']['timeSeries'],
                'insights': list(TREND_INSIGHTS),
            }
        if analysis_type == 'comparison':
            return {
                'type': 'comparison',
                'dimension': params.dimension,
                'data': data['chartData']['categoryBreakdown'],
                'insights': list(COMPARISON_INSIGHTS),
            }
        if analysis_type == 'performance':
            return {
                'type': 'performance',
                'data': data['summary'],
                'insights': list(PERFORMANCE_INSIGHTS),
            }
        return data

    def get_product_insights(self, params: ProductInsightParams) -> Dict:
        rows = params.product_filter().apply(self.engine.store.records)
        logger.debug("Product insights (%s) over %d records", params.insight_type, len(rows))

        if params.insight_type == 'top_products':
            return self._top_products(rows)
        if params.insight_type == 'recommendations':
            return {
                'type': 'recommendations',
                'recommendations': list(RECOMMENDATIONS),
                'insights': ['Data-driven recommendations available'],
            }
        return {
            'type': 'product_analysis',
            'data': [dict(r) for r in rows],
            'insights': ['Product analysis complete'],
        }

    def _top_products(self, rows) -> Dict:
        products = get_top_products(rows)
        if products:
            top = products[0]
            insights = [
                f"🏆 Top product: {top['product']}",
                f"💰 Generates ${top['sales']:,} in sales",
            ]
        else:
            insights = ['No products found for the specified filters.']
        return {'type': 'top_products', 'products': products, 'insights': insights}
