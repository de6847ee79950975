# -*- coding: utf-8 -*-
from __future__ import annotations

import pytest

from forgemate.scaffold.core.schema import (
    AttributeDefinition,
    GenerationOptions,
    ModelDefinition,
    ModelValidationError,
    RelationshipDefinition,
    collect_warnings,
    ensure_valid,
    is_valid_default,
    validate_model,
)


def test_from_dict_normalizes_camel_case(blog_post) -> None:
    assert blog_post.name == "BlogPost"
    assert blog_post.soft_deletes is True
    assert blog_post.timestamps is True
    assert blog_post.table_name is None

    title = blog_post.attributes[0]
    assert title.max_length == 200
    published = blog_post.attributes[3]
    assert published.default == "true"

    tags = blog_post.relationships[2]
    assert tags.related_model == "Tag"
    assert tags.pivot == "post_tag"
    assert tags.pivot_foreign_key == "post_id"
    assert tags.pivot_related_key == "tag_id"
    assert tags.is_collection


def test_from_dict_accepts_snake_case() -> None:
    model = ModelDefinition.from_dict(
        {
            "name": "Invoice",
            "table_name": "bills",
            "soft_deletes": True,
            "attributes": [{"name": "total", "type": "decimal", "default_value": "1.5"}],
            "relationships": [{"type": "belongsTo", "related_model": "Customer"}],
        }
    )
    assert model.table_name == "bills"
    assert model.soft_deletes is True
    assert model.attributes[0].default == "1.5"
    assert model.relationships[0].related_model == "Customer"


def test_flags_use_strict_defaults() -> None:
    model = ModelDefinition.from_dict(
        {"name": "X", "timestamps": None, "softDeletes": "yes"}
    )
    assert model.timestamps is True
    assert model.soft_deletes is False

    model = ModelDefinition.from_dict({"name": "X", "timestamps": False})
    assert model.timestamps is False


def test_from_dict_rejects_non_objects() -> None:
    with pytest.raises(ModelValidationError):
        ModelDefinition.from_dict(["not", "a", "model"])


def test_to_dict_uses_editor_keys(blog_post) -> None:
    data = blog_post.to_dict()
    assert data["softDeletes"] is True
    assert data["attributes"][0] == {"name": "title", "type": "string", "maxLength": 200}
    assert data["relationships"][2]["pivotRelatedKey"] == "tag_id"
    assert "tableName" not in data
    assert ModelDefinition.from_dict(data) == blog_post


def test_generation_options() -> None:
    options = GenerationOptions.from_dict({"generateFactory": False, "generate_seeder": True})
    assert options.generate_factory is False
    assert options.generate_seeder is True
    assert options.generate_model is None

    assert options.is_enabled("generate_model")
    assert options.is_enabled("generate_seeder")
    assert not options.is_enabled("generate_factory")
    assert options.to_dict() == {"generateFactory": False, "generateSeeder": True}


def test_valid_model_has_no_errors(blog_post) -> None:
    assert validate_model(blog_post) == []
    assert ensure_valid(blog_post) is blog_post


def test_validation_messages() -> None:
    model = ModelDefinition(
        name="blog_post",
        attributes=[
            AttributeDefinition(name="Title", type="string"),
            AttributeDefinition(name="body", type=""),
            AttributeDefinition(name="", type="text"),
        ],
        relationships=[
            RelationshipDefinition(type="morphTo", related_model="Thing"),
            RelationshipDefinition(type="", related_model=""),
        ],
    )
    assert validate_model(model) == [
        "Model name 'blog_post' must be in PascalCase",
        "Attribute name 'Title' must be in snake_case format",
        "Type is required for attribute 'body'",
        "Attribute name is required",
        "Invalid relationship type: 'morphTo'",
        "Relationship type is required",
        "Related model is required for relationship",
    ]


def test_missing_name_and_attributes() -> None:
    errors = validate_model(ModelDefinition(name=""))
    assert errors == ["Model name is required", "At least one attribute is required"]

    with pytest.raises(ModelValidationError) as excinfo:
        ensure_valid(ModelDefinition(name=""))
    assert excinfo.value.errors == errors
    assert "Model name is required" in str(excinfo.value)


@pytest.mark.parametrize(
    "type_, default, expected",
    [
        ("integer", "12", True),
        ("integer", "1e3", True),
        ("integer", "twelve", False),
        ("integer", True, False),
        ("decimal", "inf", False),
        ("json", '{"a": 1}', True),
        ("json", {"a": 1}, True),
        ("json", "{nope", False),
        ("string", "anything", True),
        ("string", None, False),
    ],
)
def test_is_valid_default(type_: str, default, expected: bool) -> None:
    attr = AttributeDefinition(name="field", type=type_, default=default)
    assert is_valid_default(attr) is expected


def test_collect_warnings() -> None:
    model = ModelDefinition(
        name="Post",
        attributes=[
            AttributeDefinition(name="title", type="string"),
            AttributeDefinition(name="title", type="text"),
            AttributeDefinition(name="shape", type="polygon"),
            AttributeDefinition(name="count", type="integer", default="many"),
        ],
        relationships=[
            RelationshipDefinition(type="hasMany", related_model="Comment", pivot="x"),
        ],
    )
    warnings = collect_warnings(model)
    assert len(warnings) == 4
    assert "Duplicate attribute name 'title'" in warnings
    assert any("Unknown type 'polygon'" in warning for warning in warnings)
    assert any("'count'" in warning and "fallback" in warning for warning in warnings)
    assert any("Pivot settings on hasMany" in warning for warning in warnings)


def test_clean_model_has_no_warnings(blog_post) -> None:
    assert collect_warnings(blog_post) == []
