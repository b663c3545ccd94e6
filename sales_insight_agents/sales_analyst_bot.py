"""
SalesAnalystBot - turns a rendered sales analysis into a conversational answer.

One request per question, no retries. Failures come back as a result dict
rather than an exception so the caller can substitute a local answer.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from .base import LLMBaseAgent, DEFAULT_MODEL

logger = logging.getLogger(__name__)

HISTORY_TURNS = 3


def _message_text(msg: Dict) -> str:
    """Text of a chat turn in either {"content": ...} or {"parts": [{"text": ...}]} form."""
    if msg.get('content'):
        return str(msg['content'])
    parts = msg.get('parts') or []
    if parts and isinstance(parts[0], dict):
        return str(parts[0].get('text') or '')
    return ''


def format_history(chat_history: Optional[List[Dict]], turns: int = HISTORY_TURNS) -> str:
    if not chat_history or turns <= 0:
        return ''
    return '\n'.join(
        f"{'User' if msg.get('role') == 'user' else 'Assistant'}: {_message_text(msg)}"
        for msg in chat_history[-turns:]
        if isinstance(msg, dict)
    )


class SalesAnalystBot(LLMBaseAgent):
    """
    Writes the prose answer for an analysed sales question.

    Usage:
        bot = SalesAnalystBot()
        result = bot.answer("top cities?", context_markdown, chat_history)
        if result['success']:
            print(result['answer'])
    """

    def __init__(self, model=DEFAULT_MODEL, max_tokens=1500, history_turns=HISTORY_TURNS,
                 api_key=None, client=None):
        super().__init__(model=model, max_tokens=max_tokens, api_key=api_key, client=client)
        self.history_turns = history_turns
        self.system_prompt = self._build_system_prompt()

    def _build_system_prompt(self) -> str:
        return ("You are a specialized AI sales analyst. You ONLY help with sales data analysis "
                "and business performance. You provide detailed insights for both high and low performers.")

    def build_prompt(self, query: str, context: str, chat_history: Optional[List[Dict]] = None) -> str:
        return f"""User asked: "{query}"

Here's the detailed data analysis:
{context}

Previous conversation:
{format_history(chat_history, self.history_turns)}

Provide a helpful, enthusiastic response about the sales data. Stay focused on business insights and actionable recommendations. Be conversational and highlight key findings. Use the data analysis above to give specific numbers and insights. If this is about poor performance, provide constructive improvement suggestions."""

    def answer(self, query: str, context: str, chat_history: Optional[List[Dict]] = None) -> Dict:
        """
        Ask Claude for the answer text.

        Returns:
            {"success": True, "answer": "...", "metadata": {...}}
            or {"success": False, "error": "..."}
        """
        messages = [{"role": "user", "content": self.build_prompt(query, context, chat_history)}]

        try:
            response = self.call_api(self.system_prompt, messages, return_full_response=True)
            text = response.content[0].text
            if not isinstance(text, str) or not text.strip():
                raise ValueError("Response contained no text")
        except RuntimeError as e:
            logger.error("Analyst call failed: %s", e)
            return {'success': False, 'error': str(e)}
        except Exception as e:
            logger.error("Unexpected analyst response: %s", e)
            return {'success': False, 'error': f'Unexpected response: {str(e)}'}

        usage = getattr(response, 'usage', None)
        return {
            'success': True,
            'answer': text,
            'metadata': {
                'model': self.model,
                'timestamp': datetime.now(timezone.utc).isoformat(),
                'input_tokens': getattr(usage, 'input_tokens', None),
                'output_tokens': getattr(usage, 'output_tokens', None),
            },
        }
