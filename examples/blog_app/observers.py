"""
Attribute observers for the blog example.
"""

from __future__ import annotations

from typing import List, Tuple


class PostObserver:
    """Records notable post changes instead of sending notifications."""

    def __init__(self) -> None:
        self.notifications: List[Tuple[str, object, object]] = []

    def onTitleCreated(self, post, title, _):
        self.notifications.append(("drafted", None, title))

    def onTitleUpdated(self, post, new_title, old_title):
        self.notifications.append(("renamed", old_title, new_title))

    def onPublishedUpdated(self, post, published, was_published):
        if published and not was_published:
            self.notifications.append(("published", post.title, post.pk))
