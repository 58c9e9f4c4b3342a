from attribute_observer.hooks import HookDispatcher

from examples.blog_app import Post, bootstrap, run_demo


def test_run_demo_returns_notifications():
    assert run_demo() == [
        ("drafted", None, "Hello Observers"),
        ("renamed", "Hello Observers", "Hello Attribute Observers"),
        ("published", "Hello Attribute Observers", 1),
    ]


def test_bootstrap_wires_observer_from_yaml():
    dispatcher = HookDispatcher()
    session, observer = bootstrap(dispatcher)

    post = session.save(Post(title="Draft", body="..."))
    post.body = "Edited"
    session.save(post)

    assert observer.notifications == [("drafted", None, "Draft")]
    assert post.slug == "draft"
    assert len(dispatcher.handlers_for("updated", Post)) == 1
