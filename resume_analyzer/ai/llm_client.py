"""
Thin, explicitly constructed wrapper around the OpenAI chat API for JSON replies.

One StructuredLLMClient per caller; there is no process-wide client. No timeout
or retry policy is applied; callers that need one wrap chat_json().
"""

import json
import logging
from typing import Any, Dict, Optional

from openai import OpenAI

from resume_analyzer.ai.errors import AIConfigurationError, AIResponseError
from resume_analyzer.core.config import get_settings

logger = logging.getLogger(__name__)


class StructuredLLMClient:
    """Sends a system prompt plus user content and returns the parsed JSON object."""

    def __init__(
        self,
        client: Optional[Any] = None,
        *,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        temperature: Optional[float] = None,
    ):
        """
        Args:
            client: Pre-built OpenAI-compatible client (tests inject a mock here).
                When given, it is not closed by close().
            model: Chat model; defaults to Settings.openai_model
            api_key: Defaults to Settings.openai_api_key
            base_url: Optional API base URL override
            temperature: Defaults to Settings.openai_temperature
        """
        settings = get_settings()
        self.model = model or settings.openai_model
        self.temperature = settings.openai_temperature if temperature is None else temperature
        self._api_key = api_key or settings.openai_api_key
        self._base_url = base_url or settings.openai_base_url
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> Any:
        if self._client is None:
            if not self._api_key:
                raise AIConfigurationError("OPENAI_API_KEY must be set to use AI-assisted extraction")
            self._client = OpenAI(api_key=self._api_key, base_url=self._base_url)
            logger.info(f"OpenAI client initialized (model={self.model})")
        return self._client

    def chat_json(self, system_prompt: str, user_content: str) -> Dict[str, Any]:
        """
        One chat completion in JSON mode.

        Raises:
            AIConfigurationError: no API key and no injected client
            AIResponseError: empty reply, or reply that is not a JSON object
            openai.OpenAIError: transport/API failures, unchanged
        """
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_content},
            ],
            response_format={"type": "json_object"},
            temperature=self.temperature,
        )
        choices = getattr(response, "choices", None) or []
        content = choices[0].message.content if choices else None
        if not content:
            raise AIResponseError("Empty reply from structured-extraction service")
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise AIResponseError(f"Reply is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise AIResponseError(f"Expected a JSON object, got {type(data).__name__}")
        logger.debug(f"LLM JSON reply keys: {sorted(data)}")
        return data

    def close(self) -> None:
        if self._owns_client and self._client is not None:
            self._client.close()
        self._client = None

    def __enter__(self) -> "StructuredLLMClient":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
