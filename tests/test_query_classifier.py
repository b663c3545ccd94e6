"""
Tests for the keyword query classifier.
"""

import pytest

from sales_insight_agents import (
    AnalyticsParams, LocationAnalysisParams, PerformanceAnalysisParams,
    ProductInsightParams, QueryClassifier, SalesDataParams, is_sales_related,
)


@pytest.fixture
def classifier():
    return QueryClassifier()


@pytest.mark.parametrize('query', [
    'weather forecast',
    'show me sales during the football game',
    'revenue of the hotel chain',
    'rain',
])
def test_off_topic_words_always_win(classifier, query):
    intent = classifier.classify(query)
    assert intent.is_off_topic
    assert intent.function_name is None
    assert intent.parameters == {}


def test_short_query_gets_benefit_of_doubt():
    assert is_sales_related('hi')
    assert is_sales_related('ok then')


def test_long_query_without_sales_words_is_off_topic():
    assert not is_sales_related('tell me a story about dragons')


def test_short_query_defaults_to_sales_data(classifier):
    intent = classifier.classify('hi')
    assert not intent.is_off_topic
    assert intent.function_name == 'getSalesData'
    assert intent.parameters == {}


def test_location_cue_with_low_words(classifier):
    # "cities" is a location cue, so this is a location analysis
    intent = classifier.classify('Show me least performing cities')
    assert intent.function_name == 'getSalesAnalytics'
    assert isinstance(intent.params, LocationAnalysisParams)
    assert intent.parameters == {
        'analysisType': 'location_analysis',
        'dimension': 'city',
        'performanceFilter': 'lowest',
    }


def test_location_dimension_and_high_filter(classifier):
    intent = classifier.classify('Which states have the highest sales?')
    assert intent.parameters == {
        'analysisType': 'location_analysis',
        'dimension': 'state',
        'performanceFilter': 'highest',
    }


def test_location_dimension_last_match_wins(classifier):
    intent = classifier.classify('sales by state and region')
    assert intent.parameters['dimension'] == 'region'


def test_performance_without_location_noun(classifier):
    intent = classifier.classify('Show me least performers')
    assert isinstance(intent.params, PerformanceAnalysisParams)
    assert intent.parameters == {
        'analysisType': 'performance_analysis',
        'performanceType': 'lowest',
        'sortOrder': 'asc',
        'dimension': 'overall',
    }


def test_performance_high_by_product(classifier):
    intent = classifier.classify('best performing products')
    assert intent.parameters == {
        'analysisType': 'performance_analysis',
        'performanceType': 'highest',
        'sortOrder': 'desc',
        'dimension': 'product',
    }


def test_performance_overall(classifier):
    intent = classifier.classify('overall performance review')
    assert intent.parameters['performanceType'] == 'overall'
    assert 'sortOrder' not in intent.parameters


def test_sales_data_filters(classifier):
    intent = classifier.classify('Furniture sales in the west for 2016')
    assert intent.function_name == 'getSalesData'
    assert isinstance(intent.params, SalesDataParams)
    assert intent.parameters == {'region': 'West', 'category': 'Furniture', 'dateRange': '2016'}


def test_sales_data_last_state_wins(classifier):
    # both states match; the later check overwrites the earlier one
    intent = classifier.classify('California vs Texas revenue')
    assert intent.parameters == {'state': 'Texas'}


def test_state_abbreviation_matches_inside_words(classifier):
    intent = classifier.classify('revenue dashboard for ny')
    assert intent.parameters['state'] == 'New York'


def test_tech_shorthand_maps_to_technology(classifier):
    intent = classifier.classify('tech revenue numbers')
    assert intent.parameters['category'] == 'Technology'


def test_product_recommendations(classifier):
    intent = classifier.classify('furniture product recommendations')
    assert intent.function_name == 'getProductInsights'
    assert isinstance(intent.params, ProductInsightParams)
    assert intent.parameters == {'insightType': 'recommendations', 'category': 'Furniture'}


def test_analytics_last_type_wins(classifier):
    intent = classifier.classify('compare category trends')
    assert intent.function_name == 'getSalesAnalytics'
    assert isinstance(intent.params, AnalyticsParams)
    assert intent.parameters == {'analysisType': 'comparison', 'dimension': 'category'}


def test_analytics_trend_over_time(classifier):
    intent = classifier.classify('analysis trend over time')
    assert intent.parameters == {'analysisType': 'trends', 'dimension': 'time'}


def test_where_is_a_location_cue(classifier):
    intent = classifier.classify('where are sales highest')
    assert intent.function_name == 'getSalesAnalytics'
    assert intent.parameters == {'analysisType': 'location_analysis', 'performanceFilter': 'highest'}


def test_how_many_is_a_location_cue(classifier):
    intent = classifier.classify('how many orders in total')
    assert isinstance(intent.params, LocationAnalysisParams)
    assert intent.parameters == {'analysisType': 'location_analysis'}
