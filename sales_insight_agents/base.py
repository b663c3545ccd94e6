"""
Base class shared by the Claude-powered agents.
"""

import anthropic
import os

DEFAULT_MODEL = "claude-sonnet-4-6"


class LLMBaseAgent:
    """Base class for all Claude-powered agents."""

    def __init__(self, model=DEFAULT_MODEL, max_tokens=4000, api_key=None, client=None):
        if client is None:
            api_key = api_key or os.getenv('ANTHROPIC_API_KEY')
            if not api_key or api_key == 'your_api_key_here':
                raise ValueError(
                    "ANTHROPIC_API_KEY environment variable not set. "
                    "Get your key at https://console.anthropic.com/settings/keys"
                )
            client = anthropic.Anthropic(api_key=api_key)
        self.client = client
        self.model = model
        self.max_tokens = max_tokens

    def call_api(self, system_prompt, messages, return_full_response=False):
        """
        Call Claude API.

        Args:
            system_prompt: System prompt string
            messages: List of {"role": "user"|"assistant", "content": "..."} dicts
            return_full_response: If True, return full response object; otherwise return text

        Returns:
            Response text string, or full response object if return_full_response=True
        """
        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                system=system_prompt,
                messages=messages
            )
            if return_full_response:
                return response
            return response.content[0].text
        except Exception as e:
            raise RuntimeError(f"Claude API error: {str(e)}")
