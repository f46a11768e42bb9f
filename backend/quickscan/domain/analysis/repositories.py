"""
Text Analysis Repositories

Interface for the external chat-completion service.
Concrete implementations are in the infrastructure layer.
"""

from abc import ABC, abstractmethod

from .entities import ChatCompletion, CompletionRequest


class ICompletionClient(ABC):
    """
    Abstract interface for a chat-completion API.

    Domain layer defines the contract, infrastructure provides the
    implementation, so services stay free of the SDK in use.
    """

    default_model: str

    @abstractmethod
    def is_available(self) -> bool:
        """Return True if the client is configured with credentials."""
        pass  # pragma: no cover

    @abstractmethod
    def complete(self, request: CompletionRequest) -> ChatCompletion:
        """
        Run one chat completion.

        Raises:
            ConfigurationError: If no API key is configured
            ServiceTimeoutError: If the call exceeds the configured timeout
            ExternalServiceError: For any other API failure
        """
        pass  # pragma: no cover
