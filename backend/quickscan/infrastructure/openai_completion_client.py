"""
OpenAI Completion Client

ICompletionClient implementation backed by the openai SDK. Works against
any OpenAI-compatible endpoint through OPENAI_BASE_URL.
"""

import logging
from typing import Any, Dict, List, Optional

from openai import APIError, APITimeoutError, OpenAI

from quickscan.domain.analysis import ChatCompletion, CompletionRequest, ICompletionClient, TokenUsage
from quickscan.domain.errors import ConfigurationError, ExternalServiceError, ServiceTimeoutError

logger = logging.getLogger(__name__)

NO_RESPONSE_TEXT = "No response generated"


class OpenAICompletionClient(ICompletionClient):
    """
    Chat-completion client with a fixed timeout and no retries.

    Without an API key the client still constructs, and every completion
    fails with ConfigurationError.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        default_model: str = "gpt-4o-mini",
        timeout: float = 30,
        client: Optional[Any] = None,
    ):
        self._api_key = (api_key or "").strip()
        self.default_model = default_model
        self.timeout = timeout
        self._client = client

        if self._client is None and self._api_key:
            self._client = OpenAI(
                api_key=self._api_key,
                base_url=base_url,
                timeout=timeout,
                max_retries=0,
            )

        if self._client is None:
            logger.warning("OPENAI_API_KEY is not set; AI endpoints will fail until it is configured")
        else:
            logger.info(f"OpenAI client initialized (model={self.default_model})")

    def is_available(self) -> bool:
        return self._client is not None

    @staticmethod
    def _build_messages(request: CompletionRequest) -> List[Dict[str, str]]:
        messages = []
        if request.system_prompt:
            messages.append({"role": "system", "content": request.system_prompt})
        messages.append({"role": "user", "content": request.content})
        return messages

    def complete(self, request: CompletionRequest) -> ChatCompletion:
        if not self.is_available():
            raise ConfigurationError("OpenAI API key is not configured")

        model = request.model or self.default_model
        params: Dict[str, Any] = {
            "model": model,
            "messages": self._build_messages(request),
        }
        if request.temperature is not None:
            params["temperature"] = request.temperature
        if request.max_tokens is not None:
            params["max_tokens"] = request.max_tokens

        try:
            response = self._client.chat.completions.create(**params)
        except APITimeoutError as e:
            logger.error(f"OpenAI request timed out after {self.timeout}s")
            raise ServiceTimeoutError(f"OpenAI request timed out after {self.timeout} seconds", e) from e
        except APIError as e:
            logger.error(f"OpenAI API error: {e}")
            raise ExternalServiceError(f"OpenAI API error: {e}", e) from e

        choices = response.choices or []
        content = NO_RESPONSE_TEXT
        if choices and choices[0].message and choices[0].message.content:
            content = choices[0].message.content

        usage = TokenUsage()
        if response.usage is not None:
            usage = TokenUsage(
                prompt_tokens=response.usage.prompt_tokens or 0,
                completion_tokens=response.usage.completion_tokens or 0,
                total_tokens=response.usage.total_tokens or 0,
            )

        logger.info(
            f"OpenAI completion model={response.model or model} "
            f"prompt_tokens={usage.prompt_tokens} completion_tokens={usage.completion_tokens} "
            f"total_tokens={usage.total_tokens}"
        )
        return ChatCompletion(content=content, model=response.model or model, usage=usage)
