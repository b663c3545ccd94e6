"""
AggregationEngine - summaries, groupings and insight strings over the
in-memory sales records.

Results are plain JSON-ready dicts, recomputed on every call. Grouping is
done with pandas; groups keep first-appearance order and every sort is
stable, so ties come out in the order the data presents them.
"""

import logging
from typing import Dict, List, Mapping, Optional, Sequence

import pandas as pd

from .data_store import (
    CATEGORY, CITY, ORDER_DATE, PRODUCT_NAME, REGION, SALES, STATE,
    SalesDataStore, get_field,
)
from .filter_engine import SalesFilter
from .utils import format_money, parse_amount, round_half_up

logger = logging.getLogger(__name__)

TOP_CITIES = 20
RAW_SAMPLE_SIZE = 50
TOP_PRODUCTS = 10

NO_DATA_INSIGHT = 'No sales data available. Please check your data file.'
NO_RESULTS_INSIGHTS = [
    'No data found for the specified filters.',
    'Try adjusting your search criteria or removing some filters.',
    'Available data includes: California, Texas, Florida, New York, and more states.',
]


def month_key(order_date: str) -> Optional[str]:
    """'3/5/2016' -> '2016-03'. None unless the date has exactly three slash parts."""
    if not order_date:
        return None
    parts = order_date.split('/')
    if len(parts) != 3:
        return None
    return f"{parts[2]}-{parts[0].rjust(2, '0')}"


def _result(summary: Dict, insights: List[str], city_breakdown=None, category_breakdown=None,
            time_series=None, map_data=None, raw_data=None) -> Dict:
    return {
        'summary': summary,
        'chartData': {
            'cityBreakdown': city_breakdown or [],
            'categoryBreakdown': category_breakdown or [],
            'timeSeries': time_series or [],
        },
        'mapData': map_data or [],
        'rawData': raw_data or [],
        'insights': insights,
    }


def _summary(location: str, filters: Dict, total_sales=0, transactions=0, average=0) -> Dict:
    return {
        'location': location,
        'totalSales': total_sales,
        'totalTransactions': transactions,
        'avgTransactionValue': average,
        'filters': filters,
    }


def empty_result() -> Dict:
    """Result used when no dataset is loaded at all."""
    return _result(_summary('No Data', {}), [NO_DATA_INSIGHT])


def no_results_result(filters: SalesFilter) -> Dict:
    """Result used when the filters leave nothing to aggregate."""
    return _result(
        _summary(filters.location or 'No Results', filters.as_dict()),
        list(NO_RESULTS_INSIGHTS),
    )


def sales_frame(rows: Sequence[Mapping]) -> pd.DataFrame:
    """One row per record with the parsed amount and the order month."""
    return pd.DataFrame({
        'city': [get_field(r, CITY) or 'Unknown' for r in rows],
        'state': [get_field(r, STATE) for r in rows],
        'region': [get_field(r, REGION) for r in rows],
        'category': [get_field(r, CATEGORY) or 'Unknown' for r in rows],
        'sales': [parse_amount(get_field(r, SALES) or '0') for r in rows],
        'month': [month_key(get_field(r, ORDER_DATE)) for r in rows],
    }, columns=['city', 'state', 'region', 'category', 'sales', 'month'])


def _by_sales_desc(grouped: pd.DataFrame) -> pd.DataFrame:
    return grouped.sort_values('sales', ascending=False, kind='stable')


def group_by_city(frame: pd.DataFrame) -> List[Dict]:
    grouped = frame.groupby('city', sort=False).agg(
        sales=('sales', 'sum'),
        transactions=('sales', 'size'),
        state=('state', 'first'),
        region=('region', 'first'),
    ).reset_index()
    return [
        {
            'city': row.city,
            'sales': float(row.sales),
            'transactions': int(row.transactions),
            'state': row.state,
            'region': row.region,
        }
        for row in _by_sales_desc(grouped).itertuples(index=False)
    ]


def group_by_category(frame: pd.DataFrame) -> List[Dict]:
    grouped = frame.groupby('category', sort=False).agg(
        sales=('sales', 'sum'),
        transactions=('sales', 'size'),
    ).reset_index()
    return [
        {'category': row.category, 'sales': float(row.sales), 'transactions': int(row.transactions)}
        for row in _by_sales_desc(grouped).itertuples(index=False)
    ]


def group_by_month(frame: pd.DataFrame) -> List[Dict]:
    """Monthly points dated the first of the month, oldest first. Rows without a month are skipped."""
    dated = frame[frame['month'].notna()]
    if dated.empty:
        return []
    grouped = dated.groupby('month', sort=False).agg(
        sales=('sales', 'sum'),
        transactions=('sales', 'size'),
    ).reset_index()
    grouped['date'] = grouped['month'] + '-01'
    grouped['_order'] = pd.to_datetime(grouped['date'], format='%Y-%m-%d', errors='coerce')
    grouped = grouped.sort_values('_order', kind='stable', na_position='last')
    return [
        {'date': row.date, 'sales': round_half_up(row.sales), 'transactions': int(row.transactions)}
        for row in grouped.itertuples(index=False)
    ]


def _rounded(entries: List[Dict]) -> List[Dict]:
    return [{**entry, 'sales': round_half_up(entry['sales'])} for entry in entries]


def generate_insights(transactions: int, total_sales: float, average: float,
                      cities: List[Dict], categories: List[Dict]) -> List[str]:
    """
    Headline figures, then the top city and the leading category when they
    have positive sales. `cities` and `categories` must already be sorted
    by sales, highest first, with unrounded sums.
    """
    insights = [
        f"📊 Found {transactions:,} transactions",
        f"💰 Total revenue: ${format_money(total_sales)}",
        f"💵 Average order value: ${average:.2f}",
    ]
    if cities and cities[0]['sales'] > 0:
        top = cities[0]
        insights.append(f"🏆 Top city: {top['city']} (${format_money(top['sales'])})")
    if categories and categories[0]['sales'] > 0:
        top = categories[0]
        insights.append(f"📦 Leading category: {top['category']} (${format_money(top['sales'])})")
    return insights


def get_top_products(rows: Sequence[Mapping], limit: int = TOP_PRODUCTS) -> List[Dict]:
    """Products by summed sales, highest first, sales rounded to whole dollars."""
    if not rows:
        return []
    frame = pd.DataFrame({
        'product': [get_field(r, PRODUCT_NAME) or 'Unknown Product' for r in rows],
        'sales': [parse_amount(get_field(r, SALES) or '0') for r in rows],
    })
    grouped = frame.groupby('product', sort=False)['sales'].sum().reset_index()
    grouped = _by_sales_desc(grouped).head(limit)
    return [
        {'product': row.product, 'sales': round_half_up(row.sales)}
        for row in grouped.itertuples(index=False)
    ]


class AggregationEngine:
    """
    Computes sales aggregations over an injected SalesDataStore.

    The engine holds no mutable state, so one instance can serve any number
    of concurrent requests.

    Usage:
        engine = AggregationEngine(store)
        result = engine.get_sales_data(SalesFilter(state='Texas'))
        result['summary']['totalSales']
    """

    def __init__(self, store: SalesDataStore):
        self.store = store

    def get_sales_data(self, filters: Optional[SalesFilter] = None) -> Dict:
        """
        Filter the dataset and summarise it.

        Returns:
            {"summary", "chartData": {"cityBreakdown", "categoryBreakdown",
            "timeSeries"}, "mapData", "rawData", "insights"}
        """
        filters = filters or SalesFilter()
        logger.debug("get_sales_data called with filters: %s", filters.as_dict())

        if self.store.is_empty:
            logger.warning("No sales data available")
            return empty_result()

        rows = filters.apply(self.store.records)
        if not rows:
            logger.info("No data found after filtering: %s", filters.as_dict())
            return no_results_result(filters)

        frame = sales_frame(rows)
        total_sales = float(frame['sales'].sum())
        transactions = len(rows)
        average = total_sales / transactions if transactions > 0 else 0

        cities = group_by_city(frame)
        categories = group_by_category(frame)
        city_entries = _rounded(cities)

        result = _result(
            _summary(
                filters.location or 'All Regions',
                filters.as_dict(),
                total_sales=round_half_up(total_sales),
                transactions=transactions,
                average=round_half_up(average),
            ),
            generate_insights(transactions, total_sales, average, cities, categories),
            city_breakdown=city_entries[:TOP_CITIES],
            category_breakdown=_rounded(categories),
            time_series=group_by_month(frame),
            map_data=city_entries,
            raw_data=[dict(r) for r in rows[:RAW_SAMPLE_SIZE]],
        )

        logger.info(
            "Aggregated %d records: total=%s categories=%d cities=%d months=%d",
            transactions, result['summary']['totalSales'],
            len(result['chartData']['categoryBreakdown']),
            len(result['chartData']['cityBreakdown']),
            len(result['chartData']['timeSeries']),
        )
        return result
