from attribute_observer.core import Model, StringField
from attribute_observer.observers import model_has_attribute


class Article(Model):
    title = StringField()

    class Meta:
        casts = {"options": "json"}

    def get_excerpt_attribute(self, value):
        return (self.title or "")[:10]

    def publish(self):
        return True


def test_stored_attribute_is_observable():
    article = Article(title="Hello")
    assert model_has_attribute(article, "title")


def test_declared_field_without_value_counts_through_casts():
    article = Article()
    assert "title" not in article.get_attributes()
    assert model_has_attribute(article, "title")


def test_meta_cast_is_observable():
    assert model_has_attribute(Article(), "options")


def test_accessor_is_observable():
    assert model_has_attribute(Article(), "excerpt")


def test_loaded_relation_is_observable():
    article = Article()
    assert not model_has_attribute(article, "author")
    article.set_relation("author", object())
    assert model_has_attribute(article, "author")


def test_method_name_is_never_observable():
    article = Article()
    article.set_attribute("publish", True)
    assert "publish" in article.get_attributes()
    assert not model_has_attribute(article, "publish")
    assert not model_has_attribute(article, "saved")
    assert not model_has_attribute(article, "get_attributes")


def test_unknown_attribute_is_not_observable():
    assert not model_has_attribute(Article(), "missing")
