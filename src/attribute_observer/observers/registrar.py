"""
Registration of attribute observers on model lifecycle hooks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional, Sequence, Type

from ..config import ObserverConfigurationError, import_from_string
from ..container import BindingResolutionError, create_container, describe, resolve_observer
from ..core.model import Model
from ..hooks import LifecycleEvent
from ..utils import get_logger
from .attributes import model_has_attribute
from .parser import observer_method_name, parse_observer_methods

if TYPE_CHECKING:
    from ..hooks import HookDispatcher


@dataclass(frozen=True)
class Registration:
    model: Type[Model]
    observer: Any
    event: LifecycleEvent
    attributes: tuple[str, ...]


class ObserverRegistrar:
    """
    Binds observer instances to model lifecycle events.

    One dispatch callback is registered per (model, observer, event). When the
    event fires, the callback calls ``on<Attribute><Event>(model, new, old)``
    for every observed attribute the operation changed.
    """

    def __init__(self, *, hooks: Optional["HookDispatcher"] = None, container: Any = None) -> None:
        if hooks is None:
            from ..hooks import hooks as default_hooks

            hooks = default_hooks
        self.hooks = hooks
        self.container = container if container is not None else create_container()
        self.logger = get_logger("observers.registrar")

    def observe_models(self, observers: Mapping[Any, Sequence[Any]]) -> List[Registration]:
        """
        Register every configured observer, in configuration order.

        Observers the container cannot build are logged and skipped.
        """
        registrations: List[Registration] = []
        for model_id, observer_ids in observers.items():
            model_class = self._resolve_model(model_id)
            if model_class is None:
                continue
            if not observer_ids:
                continue

            for observer_id in observer_ids:
                try:
                    observer = resolve_observer(self.container, observer_id)
                except BindingResolutionError as exc:
                    self.logger.error(
                        "Skipping observer %s for %s: %s",
                        describe(observer_id),
                        model_class.__name__,
                        exc.reason,
                        exc_info=exc,
                    )
                    continue
                registrations.extend(self.observe(model_class, observer))
        return registrations

    def observe(
        self,
        model_class: Type[Model],
        observer: Any,
        events_attributes: Optional[Mapping[str, Sequence[str]]] = None,
    ) -> List[Registration]:
        if events_attributes is None:
            events_attributes = parse_observer_methods(observer)

        registrations: List[Registration] = []
        for event_name, attributes in events_attributes.items():
            event = LifecycleEvent.coerce(event_name)
            handlers = self._bind_handlers(observer, event, attributes)
            if not handlers:
                continue
            self.hooks.register(event, self.make_dispatcher(handlers), model=model_class)
            registration = Registration(
                model=model_class,
                observer=observer,
                event=event,
                attributes=tuple(handlers),
            )
            registrations.append(registration)
            self.logger.debug(
                "Registered %s on %s.%s for %s",
                type(observer).__name__,
                model_class.__name__,
                event.value,
                ", ".join(registration.attributes),
            )
        return registrations

    @staticmethod
    def make_dispatcher(handlers: Mapping[str, Callable[..., Any]]) -> Callable[..., None]:
        """
        Build the hook callback for one event of one observer.
        """

        def dispatch(model: Model, **context: Any) -> None:
            if not model.was_changed():
                return
            for attribute, handler in handlers.items():
                if model_has_attribute(model, attribute) and model.was_changed(attribute):
                    handler(model, model.get_attribute_value(attribute), model.get_original(attribute))

        return dispatch

    def _bind_handlers(
        self, observer: Any, event: LifecycleEvent, attributes: Sequence[str]
    ) -> Dict[str, Callable[..., Any]]:
        handlers: Dict[str, Callable[..., Any]] = {}
        for attribute in attributes:
            method_name = observer_method_name(attribute, event)
            handler = getattr(observer, method_name, None)
            if not callable(handler):
                # e.g. acronyms: onURLSlugUpdated parses to url_slug -> onUrlSlugUpdated
                self.logger.warning(
                    "%s has no method %s for attribute '%s'; rename it to follow on<Attribute><Event>",
                    type(observer).__name__,
                    method_name,
                    attribute,
                )
                continue
            handlers.setdefault(attribute, handler)
        return handlers

    def _resolve_model(self, model_id: Any) -> Optional[Type[Model]]:
        if isinstance(model_id, type):
            model_class = model_id
        else:
            try:
                model_class = import_from_string(model_id)
            except ObserverConfigurationError as exc:
                self.logger.debug("Skipping unknown model %s: %s", model_id, exc)
                return None
        if not (isinstance(model_class, type) and issubclass(model_class, Model)):
            self.logger.debug("Skipping %s: not a Model subclass", describe(model_id))
            return None
        return model_class
