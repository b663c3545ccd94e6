"""
Tests for SalesChatService: off-topic handling, the analyst call and the
local fallback.
"""

from sales_insight_agents.chat_service import SalesChatService
from sales_insight_agents.response_builder import OFF_TOPIC_SUGGESTIONS, build_context, build_suggestions


def test_off_topic_short_circuits(service, stub_analyst):
    body = service.handle('weather forecast')
    assert body['isOffTopic'] is True
    assert body['dashboardData'] is None
    assert body['functionCalled'] is None
    assert body['suggestions'] == OFF_TOPIC_SUGGESTIONS
    assert len(body['suggestions']) == 5
    assert stub_analyst.calls == []


def test_answer_from_analyst(service, stub_analyst):
    history = [
        {'role': 'user', 'content': 'one'},
        {'role': 'assistant', 'content': 'two'},
    ]
    body = service.handle('show me texas sales', history)

    assert body['answer'] == 'Sales look great.'
    assert body['functionCalled'] == 'getSalesData'
    assert body['query'] == 'show me texas sales'
    assert body['dashboardData']['summary']['totalSales'] == 1500
    assert 'isOffTopic' not in body

    call = stub_analyst.calls[0]
    assert call['chat_history'] == history
    assert 'Sales Performance Analysis** for Texas' in call['context']
    assert 'Total Revenue: $1,500' in call['context']


def test_fallback_when_analyst_fails(analytics, failing_analyst):
    service = SalesChatService(analytics, analyst=failing_analyst)
    body = service.handle('show me texas sales')

    assert body['answer'] == (
        'I found sales data with $1,500 in total sales! '
        'Check out the dashboard for detailed visualizations.'
    )
    assert body['functionCalled'] == 'getSalesData'
    assert body['dashboardData']['summary']['location'] == 'Texas'
    assert body['suggestions'][0] == 'Compare Texas with other states'
    assert 'query' not in body


def test_fallback_without_analyst(analytics):
    body = SalesChatService(analytics, analyst=None).handle('best performing products')
    assert body['functionCalled'] == 'getSalesAnalytics'
    assert body['dashboardData']['summary']['totalSales'] == 3800


def test_fallback_keeps_product_category(analytics):
    body = SalesChatService(analytics).handle('furniture product recommendations')
    assert body['functionCalled'] == 'getProductInsights'
    assert body['dashboardData']['summary']['filters'] == {'category': 'Furniture'}
    assert body['dashboardData']['summary']['totalSales'] == 3000


def test_performance_context_ranks_lowest_first(analytics, stub_analyst):
    service = SalesChatService(analytics, analyst=stub_analyst)
    service.handle('Show me least performers')
    context = stub_analyst.calls[0]['context']
    assert context.startswith('🎯 **Lowest Performance Analysis**')
    assert '1. San Francisco: $50' in context


def test_suggestions():
    assert build_suggestions('worst cities', {})[0] == 'Show me top performing cities for comparison'
    assert build_suggestions('top cities', {})[0] == 'Show me least performing areas'
    assert build_suggestions('sales by state', {})[0] == 'Which states have lowest sales?'
    assert build_suggestions('furniture sales', {'category': 'Furniture'})[0] == 'Furniture top products'
    assert build_suggestions('hi', {})[0] == 'Show me all sales data'


def test_product_context_without_products():
    context = build_context('getProductInsights', {'insightType': 'recommendations'},
                            {'type': 'recommendations', 'insights': ['Data-driven recommendations available']})
    assert 'Product analysis complete!' in context
    assert '• Data-driven recommendations available' in context
