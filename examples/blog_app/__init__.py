"""
Blog-style sample application showcasing attribute observers.
"""

from .demo import bootstrap, run_demo
from .models import Author, Post
from .observers import PostObserver

__all__ = ["Author", "Post", "PostObserver", "bootstrap", "run_demo"]
