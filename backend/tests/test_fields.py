"""Tests for field types, groups and repeatable containers."""

import pytest

from cms.domain.exceptions import ConfigurationError
from cms.fields import Factory, Field, FieldTypeRegistry, Group, RepeatableContainer, Validator
from cms.fields.types import Boolean, Date, File, Integer, Link, Richtext, Text


def test_field_defaults_translation_key_to_its_name() -> None:
    field = Text("intro", "Intro")

    assert field.get_translation_key() == "cms.field.intro"
    assert field.get_label() == "Intro"
    assert field.get_help_key() is None


def test_field_string_value() -> None:
    field = Text("intro").set_value("Hello")

    assert field.get_value() == "Hello"
    assert str(field) == "Hello"
    assert str(Text("empty")) == ""


def test_multiple_value_field_ignores_unknown_keys() -> None:
    link = Link("more")
    link.set_value("scope", "external")
    link.set_value("target", "https://example.com")
    link.set_value("colour", "red")

    assert link.get_value() == {"scope": "external", "target": "https://example.com"}
    assert link.get("colour") is None


def test_multiple_value_field_accepts_mapping() -> None:
    link = Link("more").set_value({"scope": "cms", "target": "/about"})

    assert link.get("target") == "/about"


def test_richtext_rejects_unknown_engine() -> None:
    field = Richtext("body")

    with pytest.raises(ConfigurationError):
        field.set_engine("textile")

    assert field.set_engine("Markdown").get_engine() == "markdown"


def test_date_field_parses_stored_value() -> None:
    field = Date("launch").set_value("2024-05-01 10:30")

    parsed = field.get_datetime()

    assert (parsed.year, parsed.month, parsed.day, parsed.hour) == (2024, 5, 1, 10)
    assert Date("unset").get_datetime() is None


def test_validation_helpers_need_a_bound_validator() -> None:
    with pytest.raises(ConfigurationError):
        Text("intro").required()


def test_registry_rejects_non_field_classes() -> None:
    registry = FieldTypeRegistry()

    with pytest.raises(ConfigurationError):
        registry.register("thing", dict)


def test_registry_rejects_unknown_type() -> None:
    with pytest.raises(ConfigurationError):
        FieldTypeRegistry().create("text", "intro")


def test_group_rejects_duplicate_field() -> None:
    group = Group("images")
    group.add(Text("caption"))

    with pytest.raises(ConfigurationError):
        group.add(Text("caption"))


def test_group_clone_is_independent_and_empty() -> None:
    group = Group("images")
    group.add(Text("caption"))
    group.get("caption").set_value("A cat")

    clone = group.clone()

    assert clone.get("caption").get_value() is None
    clone.get("caption").set_value("A dog")
    assert group.get("caption").get_value() == "A cat"


def test_repeatable_container_pads_missing_sequences() -> None:
    template = Group("images").set_repeatable()
    template.add(Text("caption"))
    container = RepeatableContainer(template)

    container.get_or_create(2).get("caption").set_value("third")

    assert len(container) == 3
    assert container.get(0).get("caption").get_value() is None
    assert container.get(2).get("caption").get_value() == "third"
    assert container.get(5) is None


def test_repeatable_container_rejects_negative_sequence() -> None:
    container = RepeatableContainer(Group("images"))

    with pytest.raises(ValueError):
        container.get_or_create(-1)


def test_validator_collects_messages_per_field() -> None:
    factory = Factory()
    factory.add_field("text", "title", "Title").required().max_length(5)

    errors = factory.get_validator().validate({"title": "Far too long"})

    assert errors == {"title": ["`Title` must be at most 5 characters"]}
    assert factory.get_validator().validate({"title": "Short"}) == {}


def test_validator_clone_does_not_share_rules() -> None:
    validator = Validator()
    validator.add_rule("title", lambda value: bool(value), "required")

    clone = validator.clone().clear()

    assert validator.has_rules()
    assert not clone.has_rules()


def test_field_is_a_field_instance() -> None:
    assert isinstance(Text("intro"), Field)


def test_scalar_field_helpers() -> None:
    assert File("photo").set_allowed_types("jpg").get_allowed_types() == ["jpg"]
    assert Boolean("featured").set_value("Yes").is_checked()
    assert not Boolean("featured").set_value("0").is_checked()
    assert Integer("stock").set_value("12").get_int() == 12
    assert Integer("stock").set_value("many").get_int(default=-1) == -1
