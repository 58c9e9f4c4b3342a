"""
Naming utilities for attribute observers.
"""

import re


_FIRST_CAP_RE = re.compile("(.)([A-Z][a-z]+)")
_ALL_CAP_RE = re.compile("([a-z0-9])([A-Z])")
_WORD_SPLIT_RE = re.compile(r"[_\-\s]+")


def camel_to_snake(name: str) -> str:
    """
    Convert ``CamelCase`` or ``camelCase`` names to ``snake_case``.
    """
    step1 = _FIRST_CAP_RE.sub(r"\1_\2", name)
    snake = _ALL_CAP_RE.sub(r"\1_\2", step1).lower()
    return snake


def studly(name: str) -> str:
    """
    Convert ``snake_case`` (or dashed/spaced) names to ``StudlyCase``.

    Existing capitals inside a word are kept, so ``studly("fooBar")`` is
    ``"FooBar"``.
    """
    words = [word for word in _WORD_SPLIT_RE.split(name) if word]
    return "".join(word[0].upper() + word[1:] for word in words)
