"""
Utility helpers shared across attribute_observer packages.
"""

from .logging import configure_logging, get_logger, time_call
from .naming import camel_to_snake, studly

__all__ = ["camel_to_snake", "configure_logging", "get_logger", "studly", "time_call"]
