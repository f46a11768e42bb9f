"""
AI Service

Summaries, free-form chat completions and scan analysis on top of an
ICompletionClient.
"""

import logging
from typing import Optional

from quickscan.domain.analysis import ChatCompletion, CompletionRequest, ICompletionClient, Summary

logger = logging.getLogger(__name__)

SUMMARY_SYSTEM_PROMPT = (
    "You are a helpful assistant that summarizes text. Please provide a concise summary "
    "of the given text in approximately {max_length} characters or less. Focus on the "
    "main points and key information."
)

SCAN_SYSTEM_PROMPT = (
    "You are an expert at analyzing {format} data. Please analyze the provided data and "
    "provide insights, extract key information, and identify any patterns or important details."
)

SUMMARY_TEMPERATURE = 0.3
SCAN_TEMPERATURE = 0.5
SCAN_MAX_TOKENS = 1000


class AIService:
    """Application service behind /summarize, /chat/completion and scan analysis."""

    def __init__(self, client: ICompletionClient):
        self.client = client

    def summarize(self, content: str, max_length: int = 200) -> Summary:
        """
        Summarize content in roughly max_length characters.

        Raises:
            ConfigurationError / ServiceTimeoutError / ExternalServiceError
        """
        request = CompletionRequest(
            content=content,
            model=self.client.default_model,
            temperature=SUMMARY_TEMPERATURE,
            # roughly three characters per token
            max_tokens=max_length // 3,
            system_prompt=SUMMARY_SYSTEM_PROMPT.format(max_length=max_length),
        )
        completion = self.client.complete(request)
        return Summary(original_content=content, summary=completion.content)

    def chat(
        self,
        content: str,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        system_prompt: Optional[str] = None,
    ) -> ChatCompletion:
        return self.client.complete(
            CompletionRequest(
                content=content,
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
                system_prompt=system_prompt,
            )
        )

    def analyze_scan(self, data: str, scan_format: str) -> str:
        request = CompletionRequest(
            content=f"Please analyze this {scan_format} data: {data}",
            model=self.client.default_model,
            temperature=SCAN_TEMPERATURE,
            max_tokens=SCAN_MAX_TOKENS,
            system_prompt=SCAN_SYSTEM_PROMPT.format(format=scan_format),
        )
        return self.client.complete(request).content
