"""
Method-name parsing for attribute observers.

Observer methods follow the ``on<Attribute><Event>`` convention, e.g.
``onTitleUpdated`` reacts to ``title`` changing during ``updated``.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ..hooks import EVENTS, LifecycleEvent
from ..utils import camel_to_snake, studly


METHOD_PREFIX = "on"

# The trailing capitalized word names the event.
_EVENT_RE = re.compile(r"([A-Z][a-z0-9]*)$")


def iter_public_methods(observer: Any) -> Iterator[str]:
    """
    Yield public callable member names of ``observer`` in definition order.

    Members are walked subclass first along the MRO, each name once.
    """
    cls = observer if isinstance(observer, type) else type(observer)
    seen = set()
    for klass in cls.__mro__:
        if klass is object:
            continue
        for name, value in vars(klass).items():
            if name.startswith("_") or name in seen:
                continue
            seen.add(name)
            if isinstance(value, (staticmethod, classmethod)) or callable(value):
                yield name


def parse_method_name(method_name: str) -> Optional[Tuple[str, str]]:
    """
    Split an observer method name into ``(event, attribute)``.

    Returns ``None`` for names that are not attribute observer methods.

    Attribute names are studly-cased words. Acronyms are lower-cased as one
    word, so ``onURLSaved`` parses to ``("saved", "url")`` while the method
    bound for ``url`` is ``onUrlSaved``; write acronyms as ``Url``.
    """
    if not method_name.startswith(METHOD_PREFIX):
        return None
    remainder = method_name[len(METHOD_PREFIX):]
    match = _EVENT_RE.search(remainder)
    if match is None:
        return None
    event = match.group(1).lower()
    if event not in EVENTS:
        return None
    attribute_part = remainder[: match.start()]
    if not attribute_part:
        return None
    return event, camel_to_snake(attribute_part)


def parse_observer_methods(observer: Any) -> Dict[str, List[str]]:
    """
    Scan an attribute observer and collate its methods by event.

    ``observer`` may be an instance or a class. The result maps each event to
    the attributes observed for it, in method definition order.
    """
    events_attributes: Dict[str, List[str]] = {}
    for method_name in iter_public_methods(observer):
        parsed = parse_method_name(method_name)
        if parsed is None:
            continue
        event, attribute = parsed
        events_attributes.setdefault(event, []).append(attribute)
    return events_attributes


def observer_method_name(attribute: str, event: str) -> str:
    """Inverse of :func:`parse_method_name`."""
    return f"{METHOD_PREFIX}{studly(attribute)}{studly(LifecycleEvent.coerce(event).value)}"
