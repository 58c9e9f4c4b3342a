"""
Observer construction through a bevy dependency injection container.
"""

from __future__ import annotations

from typing import Any, Union

from bevy import DependencyResolutionError, get_registry
from bevy.containers import Container

from .config import ObserverConfigurationError, import_from_string


ObserverIdentifier = Union[str, type]


class BindingResolutionError(LookupError):
    """Raised when an observer cannot be built by the container."""

    def __init__(self, identifier: ObserverIdentifier, reason: str) -> None:
        self.identifier = identifier
        self.reason = reason
        super().__init__(f"Unable to resolve observer '{describe(identifier)}': {reason}")


def create_container() -> Container:
    """Return a fresh container from the global bevy registry."""
    return get_registry().create_container()


def describe(identifier: ObserverIdentifier) -> str:
    if isinstance(identifier, type):
        return f"{identifier.__module__}.{identifier.__qualname__}"
    return str(identifier)


def resolve_class(identifier: ObserverIdentifier) -> type:
    """
    Turn a class or an import string into a class.

    Raises :class:`BindingResolutionError` when the identifier cannot be
    imported or does not name a class.
    """
    if isinstance(identifier, type):
        return identifier
    try:
        resolved = import_from_string(identifier)
    except ObserverConfigurationError as exc:
        raise BindingResolutionError(identifier, str(exc)) from exc
    if not isinstance(resolved, type):
        raise BindingResolutionError(identifier, "target is not a class")
    return resolved


def resolve_observer(container: Any, identifier: ObserverIdentifier) -> Any:
    """
    Construct (or fetch) the observer named by ``identifier`` from ``container``.

    ``container`` only needs a bevy-style ``get(cls)`` method.
    """
    observer_class = resolve_class(identifier)
    try:
        return container.get(observer_class)
    except (DependencyResolutionError, KeyError, TypeError) as exc:
        raise BindingResolutionError(identifier, str(exc) or exc.__class__.__name__) from exc
