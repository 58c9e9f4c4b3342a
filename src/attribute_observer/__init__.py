"""
attribute_observer public package initialization.

Attribute observers react to individual model attributes changing during
lifecycle events, through methods named ``on<Attribute><Event>``.
"""

from .config import ObserverConfig, ObserverConfigurationError  # noqa: F401
from .container import BindingResolutionError, create_container  # noqa: F401
from .core.model import Model, ModelConfigurationError  # noqa: F401
from .core.fields import (
    AutoField,
    BooleanField,
    DateTimeField,
    FloatField,
    IntegerField,
    JSONField,
    StringField,
)  # noqa: F401
from .hooks import LifecycleEvent, hooks  # noqa: F401
from .observers import (
    AttributeObserverProvider,
    ObserverRegistrar,
    model_has_attribute,
    observer_method_name,
    parse_observer_methods,
)  # noqa: F401
from .persistence import PersistenceError, Session  # noqa: F401

__all__ = [
    "Model",
    "AutoField",
    "BooleanField",
    "DateTimeField",
    "FloatField",
    "IntegerField",
    "JSONField",
    "StringField",
    "ModelConfigurationError",
    "LifecycleEvent",
    "hooks",
    "Session",
    "PersistenceError",
    "ObserverConfig",
    "ObserverConfigurationError",
    "BindingResolutionError",
    "create_container",
    "AttributeObserverProvider",
    "ObserverRegistrar",
    "model_has_attribute",
    "observer_method_name",
    "parse_observer_methods",
]
