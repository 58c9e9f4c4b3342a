"""
Hook dispatcher coordinating model lifecycle events.
"""

from __future__ import annotations

from collections import defaultdict
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Type, Union

if TYPE_CHECKING:
    from ..core.model import Model


HookHandler = Callable[..., None]


class UnknownEventError(ValueError):
    """Raised when a hook is registered for an event the models never fire."""


class LifecycleEvent(str, Enum):
    CREATING = "creating"
    CREATED = "created"
    UPDATING = "updating"
    UPDATED = "updated"
    SAVING = "saving"
    SAVED = "saved"
    DELETING = "deleting"
    DELETED = "deleted"

    @classmethod
    def coerce(cls, event: Union["LifecycleEvent", str]) -> "LifecycleEvent":
        if isinstance(event, cls):
            return event
        try:
            return cls(str(event).lower())
        except ValueError as exc:
            raise UnknownEventError(
                f"Unknown lifecycle event '{event}'. Expected one of: {', '.join(EVENTS)}"
            ) from exc


EVENTS = tuple(event.value for event in LifecycleEvent)


class HookDispatcher:
    """
    Maintains global and per-model hook handlers.
    """

    def __init__(self) -> None:
        self._global_handlers: Dict[LifecycleEvent, List[HookHandler]] = defaultdict(list)
        self._model_handlers: Dict[Type["Model"], Dict[LifecycleEvent, List[HookHandler]]] = defaultdict(
            lambda: defaultdict(list)
        )

    def register(
        self,
        event: Union[LifecycleEvent, str],
        handler: HookHandler,
        *,
        model: Optional[Type["Model"]] = None,
    ) -> None:
        key = LifecycleEvent.coerce(event)
        if model:
            self._model_handlers[model][key].append(handler)
        else:
            self._global_handlers[key].append(handler)

    def handlers_for(
        self, event: Union[LifecycleEvent, str], model: Optional[Type["Model"]] = None
    ) -> List[HookHandler]:
        key = LifecycleEvent.coerce(event)
        handlers = list(self._global_handlers.get(key, []))
        if model:
            handlers.extend(self._model_handlers.get(model, {}).get(key, []))
        return handlers

    def fire(self, event: Union[LifecycleEvent, str], instance: Optional["Model"], **context: Any) -> None:
        model = instance.__class__ if instance is not None else None
        for handler in self.handlers_for(event, model):
            handler(instance, **context)

    def clear(self) -> None:
        self._global_handlers.clear()
        self._model_handlers.clear()


hooks = HookDispatcher()
