"""
Data models for the attribute observer blog example.
"""

from __future__ import annotations

from attribute_observer import BooleanField, Model, StringField


class Author(Model):
    name = StringField(nullable=False, max_length=120)
    email = StringField(nullable=False, max_length=255)


class Post(Model):
    title = StringField(nullable=False, max_length=200)
    body = StringField(nullable=False)
    published = BooleanField(default=False)

    def get_slug_attribute(self, value):
        return (self.title or "").lower().replace(" ", "-")
