"""
QueryClassifier - maps free-text questions onto an aggregation call by
substring keyword matching.

Matching is plain `keyword in query.lower()`, not tokenized, so short
keywords also hit inside longer words ("ca" in "location", "il" in "until").

Several parameters are assigned by a run of independent checks, so the last
matching keyword wins: "California vs Texas sales" filters to Texas only.
That is long-standing observable behaviour and is kept as is.
"""

import logging
from typing import Iterable

from .filter_engine import SalesFilter
from .intents import (
    GET_PRODUCT_INSIGHTS, GET_SALES_ANALYTICS, GET_SALES_DATA,
    AnalyticsParams, Intent, LocationAnalysisParams, PerformanceAnalysisParams,
    ProductInsightParams, SalesDataParams,
)

logger = logging.getLogger(__name__)

SHORT_QUERY_LENGTH = 10

DOMAIN_KEYWORDS = [
    'sales', 'revenue', 'performance', 'data', 'dashboard', 'report', 'analytics',
    'numbers', 'figures', 'profit', 'earnings', 'transactions', 'orders',
    'product', 'category', 'region', 'city', 'state', 'customer', 'business',
    'trend', 'growth', 'analysis', 'insight', 'comparison', 'top', 'best',
    'furniture', 'technology', 'office supplies', 'california', 'texas',
    'show', 'display', 'chart', 'graph', 'visualization', 'breakdown',
    'states', 'cities', 'regions', 'locations', 'where', 'how many',
    'which', 'what', 'count', 'total', 'sum', 'average', 'highest', 'lowest',
    'worst', 'least', 'poor', 'low', 'bottom', 'underperform', 'weak',
    'minimum', 'smallest', 'decline', 'drop', 'fall', 'decrease',
    'performer', 'performing', 'achiever', 'results', 'outcomes',
]

OFF_TOPIC_KEYWORDS = [
    'weather', 'temperature', 'rain', 'snow', 'climate', 'forecast',
    'movie', 'film', 'actor', 'actress', 'cinema', 'entertainment',
    'recipe', 'cooking', 'food', 'restaurant', 'meal', 'ingredient',
    'sport', 'football', 'basketball', 'soccer', 'game', 'player',
    'politics', 'government', 'election', 'president', 'politician',
    'health', 'medical', 'doctor', 'hospital', 'medicine', 'disease',
    'travel', 'vacation', 'hotel', 'flight', 'tourism', 'destination',
    'music', 'song', 'artist', 'album', 'concert', 'band',
    'joke', 'funny', 'comedy', 'humor', 'laugh',
    'personal', 'relationship', 'dating', 'marriage', 'family',
]

SALES_KEYWORDS = ['sales', 'revenue', 'performance', 'show', 'data', 'dashboard',
                  'report', 'analytics', 'numbers', 'figures']
PRODUCT_KEYWORDS = ['product', 'top', 'best', 'recommendation', 'item', 'goods']
ANALYTICS_KEYWORDS = ['trend', 'compare', 'analysis', 'insight', 'pattern']
LOCATION_KEYWORDS = ['states', 'cities', 'regions', 'locations', 'where', 'how many']
PERFORMANCE_KEYWORDS = ['performer', 'performing', 'performance']
LOW_PERFORMANCE_KEYWORDS = ['least', 'worst', 'poor', 'low', 'bottom', 'underperform',
                            'weak', 'minimum', 'smallest']
HIGH_PERFORMANCE_KEYWORDS = ['top', 'best', 'highest', 'maximum', 'greatest', 'peak']

# (keywords, value) pairs, checked in order; every hit overwrites the previous one.
STATE_KEYWORDS = [
    (('california', 'ca'), 'California'),
    (('texas', 'tx'), 'Texas'),
    (('florida', 'fl'), 'Florida'),
    (('new york', 'ny'), 'New York'),
    (('nevada', 'nv'), 'Nevada'),
    (('illinois', 'il'), 'Illinois'),
]
REGION_KEYWORDS = [
    (('west',), 'West'),
    (('east',), 'East'),
    (('central',), 'Central'),
    (('south',), 'South'),
]
SALES_CATEGORY_KEYWORDS = [
    (('furniture',), 'Furniture'),
    (('technology', 'tech'), 'Technology'),
    (('office supplies', 'supplies'), 'Office Supplies'),
]
PRODUCT_CATEGORY_KEYWORDS = [
    (('furniture',), 'Furniture'),
    (('technology',), 'Technology'),
    (('office supplies',), 'Office Supplies'),
]
YEAR_KEYWORDS = [((year,), year) for year in ('2015', '2016', '2017', '2018')]


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def last_match(text: str, table, default=None):
    """Run every (keywords, value) check in order; the last one that hits wins."""
    value = default
    for keywords, candidate in table:
        if contains_any(text, keywords):
            value = candidate
    return value


def is_sales_related(query: str) -> bool:
    """
    Domain gate. Any off-topic word rejects the query outright. Otherwise a
    sales word accepts it, and so does being shorter than ten characters.
    """
    lower_query = query.lower()

    if contains_any(lower_query, OFF_TOPIC_KEYWORDS):
        return False

    if len(lower_query) < SHORT_QUERY_LENGTH:
        return True

    return contains_any(lower_query, DOMAIN_KEYWORDS)


class QueryClassifier:
    """
    Keyword-driven intent detection.

    Usage:
        classifier = QueryClassifier()
        intent = classifier.classify("Show me least performing cities")
        intent.function_name, intent.parameters
    """

    def classify(self, query: str) -> Intent:
        logger.info("Analyzing query: %s", query)

        if not is_sales_related(query):
            logger.info("Query is off-topic")
            return Intent.off_topic()

        q = query.lower()
        has_sales = contains_any(q, SALES_KEYWORDS)
        has_product = contains_any(q, PRODUCT_KEYWORDS)
        has_analytics = contains_any(q, ANALYTICS_KEYWORDS)
        has_location = contains_any(q, LOCATION_KEYWORDS)
        has_performance = contains_any(q, PERFORMANCE_KEYWORDS)
        has_low = contains_any(q, LOW_PERFORMANCE_KEYWORDS)
        has_high = contains_any(q, HIGH_PERFORMANCE_KEYWORDS)

        if has_location or 'state' in q or 'city' in q:
            intent = Intent(GET_SALES_ANALYTICS, self._location_params(q, has_low, has_high))
        elif has_performance or has_low or has_high:
            intent = Intent(GET_SALES_ANALYTICS, self._performance_params(q, has_low, has_high))
        elif has_sales or (not has_product and not has_analytics):
            intent = Intent(GET_SALES_DATA, self._sales_data_params(q))
        elif has_product:
            intent = Intent(GET_PRODUCT_INSIGHTS, self._product_params(q, has_low, has_high))
        elif has_analytics:
            intent = Intent(GET_SALES_ANALYTICS, self._analytics_params(q))
        else:
            logger.info("No specific intent detected, defaulting to %s", GET_SALES_DATA)
            intent = Intent(GET_SALES_DATA, SalesDataParams())

        logger.info("Detected %s %s", intent.function_name, intent.parameters)
        return intent

    def _location_params(self, q: str, has_low: bool, has_high: bool) -> LocationAnalysisParams:
        params = LocationAnalysisParams()
        if 'state' in q:
            params.dimension = 'state'
        if 'city' in q or 'cities' in q:
            params.dimension = 'city'
        if 'region' in q:
            params.dimension = 'region'

        if has_low:
            params.performance_filter = 'lowest'
        if has_high:
            params.performance_filter = 'highest'
        return params

    def _performance_params(self, q: str, has_low: bool, has_high: bool) -> PerformanceAnalysisParams:
        params = PerformanceAnalysisParams()
        if has_low:
            params.performance_type = 'lowest'
            params.sort_order = 'asc'
        elif has_high:
            params.performance_type = 'highest'
            params.sort_order = 'desc'

        if 'state' in q:
            params.dimension = 'state'
        elif 'city' in q or 'cities' in q:
            params.dimension = 'city'
        elif 'region' in q:
            params.dimension = 'region'
        elif 'product' in q:
            params.dimension = 'product'
        elif 'category' in q:
            params.dimension = 'category'
        return params

    def _sales_data_params(self, q: str) -> SalesDataParams:
        return SalesDataParams(
            state=last_match(q, STATE_KEYWORDS),
            region=last_match(q, REGION_KEYWORDS),
            category=last_match(q, SALES_CATEGORY_KEYWORDS),
            date_range=last_match(q, YEAR_KEYWORDS),
        )

    def _product_params(self, q: str, has_low: bool, has_high: bool) -> ProductInsightParams:
        params = ProductInsightParams()
        if 'top' in q or has_high:
            params.insight_type = 'top_products'
        if has_low:
            params.insight_type = 'poor_products'
        if 'recommendation' in q:
            params.insight_type = 'recommendations'
        params.category = last_match(q, PRODUCT_CATEGORY_KEYWORDS)
        return params

    def _analytics_params(self, q: str) -> AnalyticsParams:
        params = AnalyticsParams(filters=SalesFilter())
        if 'trend' in q:
            params.analysis_type = 'trends'
        if 'compare' in q:
            params.analysis_type = 'comparison'
        if 'performance' in q:
            params.analysis_type = 'performance'

        if 'region' in q:
            params.dimension = 'region'
        if 'category' in q:
            params.dimension = 'category'
        if 'time' in q:
            params.dimension = 'time'
        return params
