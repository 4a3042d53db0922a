"""Shared async Claude API client mixin.

Eliminates duplicated _get_client() / is_available() boilerplate
across StyleAnalyzer and ReplyGenerator, and funnels every API
failure into InferenceError so callers have a single fallback point.
"""

from typing import Any, Optional

import anthropic

from src.core.config import get_config
from src.core.exceptions import InferenceError
from src.core.logging import get_logger

logger = get_logger(__name__)


class ClaudeClientMixin:
    """Mixin providing lazy AsyncAnthropic client initialization.

    Classes using this mixin should set ``self._client = None`` in
    their own ``__init__``.
    """

    _client: Optional[anthropic.AsyncAnthropic] = None

    def _get_claude_config(self):
        """Return the app config (override if config is stored differently)."""
        return get_config()

    def is_available(self) -> bool:
        """Check if the Claude API key is configured."""
        return bool(self._get_claude_config().claude_api_key)

    def _get_client(self) -> anthropic.AsyncAnthropic:
        """Get or create the Anthropic client (lazy singleton)."""
        if self._client is None:
            config = self._get_claude_config()
            if not config.claude_api_key:
                raise InferenceError("CLAUDE_API_KEY not configured")
            self._client = anthropic.AsyncAnthropic(
                api_key=config.claude_api_key,
                timeout=config.request_timeout,
            )
        return self._client

    async def _complete(
        self,
        caller: str,
        prompt: str,
        system: Optional[str] = None,
        max_tokens: int = 512,
    ) -> str:
        """Send one user prompt and return the text reply.

        Args:
            caller: Module name for logging (e.g. "style_learner")
            prompt: User message
            system: Optional system prompt
            max_tokens: Reply token cap

        Returns:
            Concatenated text blocks of the reply, stripped

        Raises:
            InferenceError: On any API failure or an empty reply
        """
        config = self._get_claude_config()
        client = self._get_client()

        kwargs: dict[str, Any] = {
            "model": config.claude_model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            kwargs["system"] = system

        try:
            response = await client.messages.create(**kwargs)
        except anthropic.APIError as e:
            raise InferenceError(f"{caller}: Claude request failed: {e}") from e

        text = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        ).strip()

        self._track_usage(
            caller,
            config.claude_model,
            response.usage.input_tokens,
            response.usage.output_tokens,
        )

        if not text:
            raise InferenceError(f"{caller}: Claude returned an empty reply")
        return text

    def _track_usage(self, caller: str, model: str, input_tokens: int, output_tokens: int) -> None:
        """Log API usage for diagnostics.

        Args:
            caller: Module name (e.g. "style_learner", "reply_generator")
            model: Claude model used
            input_tokens: Input tokens consumed
            output_tokens: Output tokens consumed
        """
        logger.debug(
            "Claude usage",
            extra={
                "context": {
                    "caller": caller,
                    "model": model,
                    "input_tokens": input_tokens,
                    "output_tokens": output_tokens,
                }
            },
        )
