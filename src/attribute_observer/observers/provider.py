"""
Boot-time wiring of configured attribute observers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Mapping, Optional, Sequence, Union

from ..config import ObserverConfig
from ..utils import get_logger
from .registrar import ObserverRegistrar, Registration

if TYPE_CHECKING:
    from ..hooks import HookDispatcher


class AttributeObserverProvider:
    """
    Loads observer configuration and registers it on the lifecycle hooks.

    Configuration defaults to :meth:`ObserverConfig.from_env`. ``boot`` runs
    registration once per provider; later calls return the first result.
    """

    def __init__(
        self,
        config: Union[ObserverConfig, Mapping[str, Any], None] = None,
        *,
        hooks: Optional["HookDispatcher"] = None,
        container: Any = None,
    ) -> None:
        if config is None:
            config = ObserverConfig.from_env()
        elif not isinstance(config, ObserverConfig):
            config = ObserverConfig.from_mapping(config)
        self.config = config
        self.registrar = ObserverRegistrar(hooks=hooks, container=container)
        self.logger = get_logger("observers.provider")
        self._registrations: Optional[List[Registration]] = None

    @property
    def booted(self) -> bool:
        return self._registrations is not None

    @property
    def registrations(self) -> Sequence[Registration]:
        return tuple(self._registrations or ())

    def boot(self) -> List[Registration]:
        if self._registrations is not None:
            return list(self._registrations)
        if not self.config:
            self.logger.debug("No attribute observers configured")
            self._registrations = []
            return []
        self._registrations = self.registrar.observe_models(self.config.observers)
        self.logger.info(
            "Registered %d attribute observer hooks from %s",
            len(self._registrations),
            self.config.source or "inline configuration",
        )
        return list(self._registrations)
