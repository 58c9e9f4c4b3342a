"""
Utility helpers for running the attribute observer blog example end-to-end.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Tuple

from attribute_observer import AttributeObserverProvider, ObserverConfig, Session, create_container
from attribute_observer.hooks import HookDispatcher

from .models import Author, Post
from .observers import PostObserver

CONFIG_PATH = Path(__file__).with_name("attribute_observer.yaml")


def bootstrap(hooks: Optional[HookDispatcher] = None) -> Tuple[Session, PostObserver]:
    """
    Boot the observers from the bundled YAML file and return a session plus
    the observer instance the container hands out.
    """

    hooks = hooks or HookDispatcher()
    container = create_container()
    observer = PostObserver()
    container.add(PostObserver, observer)

    provider = AttributeObserverProvider(
        ObserverConfig.from_yaml(CONFIG_PATH),
        hooks=hooks,
        container=container,
    )
    provider.boot()
    return Session(hooks=hooks), observer


def run_demo() -> List[Tuple[str, object, object]]:
    """
    Draft, rename and publish a post; return the recorded notifications.
    """

    session, observer = bootstrap()
    with session:
        author = session.save(Author(name="Alice Carter", email="alice@example.com"))
        post = session.save(Post(title="Hello Observers", body=f"Written by {author.name}"))

        post.title = "Hello Attribute Observers"
        session.save(post)

        post.published = True
        session.save(post)

        # Saving without changes notifies nobody.
        session.save(post)
    return list(observer.notifications)


if __name__ == "__main__":
    for kind, before, after in run_demo():
        print(f"{kind}: {before!r} -> {after!r}")
