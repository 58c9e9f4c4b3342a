"""
Attribute existence checks against model instances.
"""

from __future__ import annotations

from ..core.model import Model


def model_has_attribute(model: Model, attribute: str) -> bool:
    """
    Comprehensively check for the presence of an attribute on a model instance.

    Method names never count, even when a stored value shares the name.
    Otherwise the attribute may be stored, cast, computed by an accessor, or
    a loaded relation.
    """
    if callable(getattr(type(model), attribute, None)):
        return False
    return (
        attribute in model.get_attributes()
        or attribute in model.get_casts()
        or model.has_get_mutator(attribute)
        or attribute in model.get_relations()
    )
