"""
SalesChatService - answers one chat question end to end.

classify -> aggregate -> render context -> analyst agent. Anything that goes
wrong after classification is logged and answered locally from a freshly
computed sales summary, so callers always get a usable response.
"""

import logging
from typing import Dict, List, Optional

from .analytics import SalesAnalytics
from .intents import Intent
from .query_classifier import QueryClassifier
from .response_builder import (
    OFF_TOPIC_ANSWER, OFF_TOPIC_SUGGESTIONS,
    build_context, build_suggestions, fallback_answer,
)
from .sales_analyst_bot import SalesAnalystBot

logger = logging.getLogger(__name__)


class SalesChatService:
    """
    Usage:
        service = SalesChatService(analytics, analyst=SalesAnalystBot())
        body = service.handle("show me texas sales", chat_history=[])
    """

    def __init__(self, analytics: SalesAnalytics, analyst: Optional[SalesAnalystBot] = None,
                 classifier: Optional[QueryClassifier] = None):
        self.analytics = analytics
        self.analyst = analyst
        self.classifier = classifier or QueryClassifier()

    def handle(self, query: str, chat_history: Optional[List[Dict]] = None) -> Dict:
        intent = self.classifier.classify(query)

        if intent.is_off_topic:
            return {
                'answer': OFF_TOPIC_ANSWER,
                'dashboardData': None,
                'functionCalled': None,
                'isOffTopic': True,
                'suggestions': list(OFF_TOPIC_SUGGESTIONS),
            }

        try:
            return self._answer(query, intent, chat_history or [])
        except Exception:
            logger.exception("Error answering query %r, using fallback", query)
            return self._fallback(query, intent)

    def _answer(self, query: str, intent: Intent, chat_history: List[Dict]) -> Dict:
        parameters = intent.parameters
        result = self.analytics.run(intent)
        suggestions = build_suggestions(query, parameters)

        if self.analyst is None:
            raise RuntimeError("Analyst agent is not configured")

        context = build_context(intent.function_name, parameters, result)
        reply = self.analyst.answer(query, context, chat_history)
        if not reply['success']:
            raise RuntimeError(reply['error'])

        return {
            'answer': reply['answer'],
            'dashboardData': result,
            'functionCalled': intent.function_name,
            'query': query,
            'suggestions': suggestions,
        }

    def _fallback(self, query: str, intent: Intent) -> Dict:
        data = self.analytics.engine.get_sales_data(intent.params.fallback_filter())
        return {
            'answer': fallback_answer(data),
            'dashboardData': data,
            'functionCalled': intent.function_name,
            'suggestions': build_suggestions(query, intent.parameters),
        }
