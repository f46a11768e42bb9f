"""
Text Analysis Entities

Requests and results exchanged with the chat-completion service.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class CompletionRequest:
    """A single-turn chat completion, optionally preceded by a system prompt."""

    content: str
    model: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    system_prompt: Optional[str] = None


@dataclass(frozen=True)
class TokenUsage:
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
            "total_tokens": self.total_tokens,
        }


@dataclass(frozen=True)
class ChatCompletion:
    """Completion text returned by the model, with its token accounting."""

    content: str
    model: str
    usage: TokenUsage
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "content": self.content,
            "model": self.model,
            "usage": self.usage.to_dict(),
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class Summary:
    """Summary of a document together with the lengths of both texts."""

    original_content: str
    summary: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    @property
    def original_length(self) -> int:
        return len(self.original_content)

    @property
    def summary_length(self) -> int:
        return len(self.summary)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "original_content": self.original_content,
            "summary": self.summary,
            "original_length": self.original_length,
            "summary_length": self.summary_length,
            "timestamp": self.timestamp,
        }
