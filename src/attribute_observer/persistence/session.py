"""
In-memory session driving the model lifecycle and firing its hooks.
"""

from __future__ import annotations

import itertools
from collections import defaultdict
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional, Type

from ..core.model import Model
from ..hooks import LifecycleEvent
from ..utils import get_logger, time_call


if TYPE_CHECKING:
    from ..hooks import HookDispatcher


class PersistenceError(RuntimeError):
    """Raised when a lifecycle operation cannot be performed on an instance."""


class Session:
    """
    Persists model instances in memory and fires lifecycle events in order.

    ``save`` fires ``saving`` then ``creating``/``created`` for new instances
    or ``updating``/``updated`` for dirty existing ones, and finally ``saved``.
    ``delete`` fires ``deleting`` and ``deleted``. The change set is
    recomputed before each "before" event so that modifications made by
    earlier handlers are observed, and stays readable through
    ``Model.was_changed`` until the next operation on the instance.
    """

    def __init__(self, *, hooks: Optional["HookDispatcher"] = None) -> None:
        if hooks is None:
            from ..hooks import hooks as default_hooks

            hooks = default_hooks
        self.hooks = hooks
        # One in-memory instance per (model, primary key).
        self._records: Dict[Type[Model], Dict[Any, Model]] = defaultdict(dict)
        self._sequences: Dict[Type[Model], Iterator[int]] = defaultdict(lambda: itertools.count(1))
        self.logger = get_logger("persistence.session")

    # ------------------------------------------------------------------ #
    # Context management
    # ------------------------------------------------------------------ #
    def __enter__(self) -> "Session":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self._records.clear()

    # ------------------------------------------------------------------ #
    def save(self, instance: Model) -> Model:
        model_name = instance.__class__.__name__
        with time_call(f"save {model_name}", self.logger, model=model_name):
            instance.sync_changes()
            self.hooks.fire(LifecycleEvent.SAVING, instance, session=self)
            if not instance.exists:
                self._persist_new(instance)
            elif instance.is_dirty():
                self._persist_dirty(instance)
            else:
                self._records[instance.__class__][instance.pk] = instance
                self.logger.debug("No pending changes on %s, skipping update", model_name)
            self.hooks.fire(LifecycleEvent.SAVED, instance, session=self)
            instance.sync_original()
        return instance

    def delete(self, instance: Model) -> None:
        model_name = instance.__class__.__name__
        if not instance.exists:
            raise PersistenceError(f"Cannot delete unsaved '{model_name}' instance.")
        with time_call(f"delete {model_name}", self.logger, model=model_name):
            instance.sync_changes()
            self.hooks.fire(LifecycleEvent.DELETING, instance, session=self)
            self._records[instance.__class__].pop(instance.pk, None)
            instance._exists = False
            self.hooks.fire(LifecycleEvent.DELETED, instance, session=self)

    def get(self, model: Type[Model], pk: Any) -> Optional[Model]:
        return self._records.get(model, {}).get(pk)

    def all(self, model: Type[Model]) -> List[Model]:
        return list(self._records.get(model, {}).values())

    # ------------------------------------------------------------------ #
    def _persist_new(self, instance: Model) -> None:
        instance.sync_changes()
        self.hooks.fire(LifecycleEvent.CREATING, instance, session=self)
        self._assign_primary_key(instance)
        instance.sync_changes()
        self._records[instance.__class__][instance.pk] = instance
        instance._exists = True
        self.logger.debug("Inserted %s pk=%s", instance.__class__.__name__, instance.pk)
        self.hooks.fire(LifecycleEvent.CREATED, instance, session=self)

    def _persist_dirty(self, instance: Model) -> None:
        for field in instance._meta.get_fields():
            field.pre_update(instance)
        instance.sync_changes()
        self.hooks.fire(LifecycleEvent.UPDATING, instance, session=self)
        instance.sync_changes()
        self._records[instance.__class__][instance.pk] = instance
        self.logger.debug(
            "Updated %s pk=%s fields=%s",
            instance.__class__.__name__,
            instance.pk,
            sorted(instance.get_changes()),
        )
        self.hooks.fire(LifecycleEvent.UPDATED, instance, session=self)

    def _assign_primary_key(self, instance: Model) -> None:
        pk_field = instance._meta.primary_key
        if pk_field is None:
            return
        records = self._records[instance.__class__]
        if instance.pk is None:
            sequence = self._sequences[instance.__class__]
            pk = pk_field.to_python(next(sequence))
            # Skip keys already taken by instances saved with an explicit pk.
            while pk in records:
                pk = pk_field.to_python(next(sequence))
            setattr(instance, pk_field.require_name(), pk)
        elif records.get(instance.pk, instance) is not instance:
            raise PersistenceError(
                f"'{instance.__class__.__name__}' with pk={instance.pk!r} already exists."
            )
