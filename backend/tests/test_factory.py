"""Tests for the field factory."""

import pytest

from cms.domain.exceptions import ConfigurationError
from cms.fields import Factory, Group
from cms.fields.types import Productoption, Text
from cms.page_types import PageType, PageTypeCollection


class Article(PageType):
    name = "Article"

    def set_fields(self, factory):
        factory.add_field("text", "intro", "Intro").required()
        gallery = factory.add_group("gallery", "Gallery").set_repeatable()
        gallery.add(factory.get_field("file", "image"))
        gallery.get("image").required()
        factory.add_field("productoption", "option")


class Broken(PageType):
    name = "broken"

    def set_fields(self, factory):
        factory.add_field("text", "intro")
        factory.add_field("richtext", "intro")


def test_build_registers_fields_in_order() -> None:
    factory = Factory().build(Article())

    assert [field.get_name() for field in factory] == ["intro", "gallery", "option"]
    assert isinstance(factory.get("intro"), Text)
    assert isinstance(factory.get("gallery"), Group)
    assert isinstance(factory.get("option"), Productoption)
    assert len(factory) == 3


def test_build_resets_previous_schema() -> None:
    factory = Factory()
    factory.build(Article())
    first_intro = factory.get("intro")

    factory.build(Article())

    assert len(factory) == 3
    assert factory.get("intro") is not first_intro


def test_duplicate_field_name_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        Factory().build(Broken())


def test_unknown_field_type_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        Factory().add_field("colourpicker", "colour")


def test_group_rules_stay_in_the_group_scope() -> None:
    factory = Factory().build(Article())

    page_errors = factory.get_validator().validate({"intro": "Hi"})
    group_errors = factory.get("gallery").validate()

    assert page_errors == {}
    assert "image" in group_errors
    assert factory.get_validator().get_rules("image") == []


def test_page_type_collection_lower_cases_names() -> None:
    types = PageTypeCollection([Article()])

    assert types.get("ARTICLE").get_name() == "Article"
    assert "article" in types


def test_page_type_collection_rejects_unknown_type() -> None:
    with pytest.raises(ConfigurationError):
        PageTypeCollection().get("missing")
