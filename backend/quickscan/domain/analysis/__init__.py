"""
Text Analysis Domain

Summaries, chat completions and scan analysis delegated to an external LLM.
"""

from .entities import ChatCompletion, CompletionRequest, Summary, TokenUsage
from .repositories import ICompletionClient

__all__ = [
    "ChatCompletion",
    "CompletionRequest",
    "ICompletionClient",
    "Summary",
    "TokenUsage",
]
