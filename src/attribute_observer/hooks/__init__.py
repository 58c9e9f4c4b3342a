"""
Lifecycle hooks registry for attribute_observer models.
"""

from .dispatcher import EVENTS, HookDispatcher, LifecycleEvent, UnknownEventError, hooks

__all__ = ["EVENTS", "HookDispatcher", "LifecycleEvent", "UnknownEventError", "hooks"]
