"""
Attribute observers: per-attribute callbacks on model lifecycle events.
"""

from .attributes import model_has_attribute
from .parser import observer_method_name, parse_method_name, parse_observer_methods
from .provider import AttributeObserverProvider
from .registrar import ObserverRegistrar, Registration

__all__ = [
    "AttributeObserverProvider",
    "ObserverRegistrar",
    "Registration",
    "model_has_attribute",
    "observer_method_name",
    "parse_method_name",
    "parse_observer_methods",
]
