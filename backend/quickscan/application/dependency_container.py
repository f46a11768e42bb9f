"""
Dependency Injection Container

Holds the process-wide service instances built by the application factory.
Request handlers reach services through the Flask app; tests swap single
services with override().
"""

import logging
import threading
from typing import Any, Callable, Dict, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DependencyNotFoundError(Exception):
    """Raised when resolving a type that was never registered."""


class DependencyContainer:
    """
    Thread-safe registry of singletons and factories keyed by type.

    Resolution order is override, then singleton, then factory.
    """

    def __init__(self):
        self._singletons: Dict[Type, Any] = {}
        self._factories: Dict[Type, Callable[[], Any]] = {}
        self._overrides: Dict[Type, Any] = {}
        self._lock = threading.Lock()

    def register_singleton(self, interface: Type[T], instance: T) -> None:
        """
        Register one shared instance for a type.

        Example:
            container.register_singleton(FileRegistry, registry)
        """
        with self._lock:
            self._singletons[interface] = instance
        logger.debug(f"Registered singleton: {interface.__name__}")

    def register_factory(self, interface: Type[T], factory: Callable[[], T]) -> None:
        """Register a factory called on every resolve()."""
        with self._lock:
            self._factories[interface] = factory
        logger.debug(f"Registered factory: {interface.__name__}")

    def resolve(self, interface: Type[T]) -> T:
        """
        Resolve a registered type.

        Raises:
            DependencyNotFoundError: If nothing is registered for the type
        """
        with self._lock:
            if interface in self._overrides:
                return self._overrides[interface]
            if interface in self._singletons:
                return self._singletons[interface]
            factory = self._factories.get(interface)

        if factory is None:
            raise DependencyNotFoundError(f"No registration found for type: {interface.__name__}")

        # Called outside the lock so factories may resolve other types
        return factory()

    def override(self, interface: Type[T], instance: T) -> None:
        """Replace a registration, typically with a test double."""
        with self._lock:
            self._overrides[interface] = instance
        logger.debug(f"Overridden: {interface.__name__}")

    def clear_overrides(self) -> None:
        with self._lock:
            self._overrides.clear()

    def is_registered(self, interface: Type) -> bool:
        with self._lock:
            return (
                interface in self._overrides
                or interface in self._singletons
                or interface in self._factories
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._singletons) + len(self._factories)
