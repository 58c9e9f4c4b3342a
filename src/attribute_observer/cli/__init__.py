"""Command line tooling for attribute observers."""

from .main import cli

__all__ = ["cli"]
