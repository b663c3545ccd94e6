"""
HTTP surface for the sales chat service.

A Flask app with a single chat endpoint. The dataset is loaded once, before
the app starts serving, and shared read-only by every request.
"""

import logging
import os
from typing import Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from .aggregation_engine import AggregationEngine
from .analytics import SalesAnalytics
from .chat_service import SalesChatService
from .config import Settings, configure_logging, load_settings
from .data_store import SalesDataStore
from .sales_analyst_bot import SalesAnalystBot

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    'X-Content-Type-Options': 'nosniff',
    'X-Frame-Options': 'DENY',
    'X-XSS-Protection': '1; mode=block',
}


def build_analyst(settings: Settings) -> Optional[SalesAnalystBot]:
    """The analyst agent, or None (local answers only) when no API key is configured."""
    try:
        return SalesAnalystBot(
            model=settings.model,
            max_tokens=settings.max_tokens,
            history_turns=settings.history_turns,
            api_key=settings.anthropic_api_key,
        )
    except ValueError as e:
        logger.warning("Analyst agent disabled: %s", e)
        return None


def create_app(settings: Optional[Settings] = None, store: Optional[SalesDataStore] = None,
               analyst: Optional[SalesAnalystBot] = None, service: Optional[SalesChatService] = None) -> Flask:
    """
    Build the Flask app. Anything not passed in is built from settings:
    the store is loaded from settings.data_path and the analyst from the
    configured API key.
    """
    settings = settings or load_settings()
    if service is None:
        if store is None:
            store = SalesDataStore.load(settings.data_path)
        if analyst is None:
            analyst = build_analyst(settings)
        service = SalesChatService(SalesAnalytics(AggregationEngine(store)), analyst=analyst)

    app = Flask(__name__)
    app.config['CHAT_SERVICE'] = service
    CORS(
        app,
        supports_credentials=True,
        methods=['GET', 'POST', 'OPTIONS'],
        allow_headers=['Content-Type', 'Authorization'],
        max_age=86400,
    )

    @app.after_request
    def add_headers(response):
        for name, value in SECURITY_HEADERS.items():
            response.headers[name] = value
        return response

    @app.route('/health')
    def health():
        records = len(service.analytics.engine.store)
        return jsonify({'status': 'ok', 'records': records})

    @app.route('/chat', methods=['POST'])
    def chat():
        body = request.get_json(silent=True) or {}
        query = body.get('query') if isinstance(body, dict) else None
        if not query or not isinstance(query, str):
            return jsonify({'error': 'Query is required'}), 400

        chat_history = body.get('chatHistory') or []
        if not isinstance(chat_history, list):
            chat_history = []

        return jsonify(service.handle(query, chat_history))

    return app


def main():
    settings = load_settings()
    configure_logging(settings.log_level)
    app = create_app(settings)
    logger.info("Sales analytics server running at http://%s:%s (pid %s)",
                settings.host, settings.port, os.getpid())
    app.run(host=settings.host, port=settings.port)


if __name__ == '__main__':
    main()
