"""Shared fixtures: a small controlled dataset and stub analyst agents."""

import pytest

from sales_insight_agents import AggregationEngine, SalesAnalytics, SalesDataStore
from sales_insight_agents.app import create_app
from sales_insight_agents.chat_service import SalesChatService
from sales_insight_agents.config import Settings

SAMPLE_CSV = """Order Date,State,City,Region,Category,Product Name,Sales
1/5/2016,Texas,Austin,Central,Furniture,"Chair, Black","1,000.00"
2/10/2016,Texas,Houston,Central,Technology,Phone,500

1/20/2016,California,Los Angeles,West,Technology,Phone,250.50
12/1/2015,California,San Francisco,West,Office Supplies,Paper,49.50
3/3/2017,New York,New York City,East,Furniture,Desk,2000
bad-date,Texas,Austin,Central,Office Supplies,Paper,abc
"""


class StubAnalyst:
    """Stands in for SalesAnalystBot; records what it was asked."""

    def __init__(self, reply=None):
        self.reply = reply or {'success': True, 'answer': 'Sales look great.', 'metadata': {}}
        self.calls = []

    def answer(self, query, context, chat_history=None):
        self.calls.append({'query': query, 'context': context, 'chat_history': chat_history})
        return self.reply


@pytest.fixture
def sample_csv(tmp_path):
    path = tmp_path / "train.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path


@pytest.fixture
def store(sample_csv):
    return SalesDataStore.load(sample_csv)


@pytest.fixture
def engine(store):
    return AggregationEngine(store)


@pytest.fixture
def analytics(engine):
    return SalesAnalytics(engine)


@pytest.fixture
def stub_analyst():
    return StubAnalyst()


@pytest.fixture
def failing_analyst():
    return StubAnalyst({'success': False, 'error': 'Claude API error: timed out'})


@pytest.fixture
def service(analytics, stub_analyst):
    return SalesChatService(analytics, analyst=stub_analyst)


@pytest.fixture
def client(store, stub_analyst, sample_csv):
    app = create_app(Settings(data_path=sample_csv), store=store, analyst=stub_analyst)
    app.config['TESTING'] = True
    return app.test_client()
