# -*- coding: utf-8 -*-
from __future__ import annotations

from datetime import datetime

import pytest

from forgemate.scaffold import scaffold_from_dict
from forgemate.scaffold.core.config import load_config
from forgemate.scaffold.core.generator import (
    ScaffoldError,
    ScaffoldGenerator,
    generate_scaffold,
    resolve_migration_time,
)
from forgemate.scaffold.core.schema import ModelDefinition, ModelValidationError
from forgemate.scaffold.core.templates import StubLoader
from forgemate.scaffold.registry import StubRegistry, StubTarget


FIXED = datetime(2024, 3, 1, 9, 30, 15)


def _clock() -> datetime:
    return FIXED


def test_generates_every_default_file(blog_post) -> None:
    result = ScaffoldGenerator(clock=_clock).generate(blog_post)

    assert result.success
    assert len(result.files) == 16
    assert result.metadata["model"] == "BlogPost"
    assert result.metadata["file_count"] == 16
    assert result.metadata["custom_stubs"] == []
    assert result.metadata["relationship_naming"] == "camel"

    for generated in result.files:
        assert "{{" not in generated.content, generated.stub


def test_output_paths(blog_post) -> None:
    result = ScaffoldGenerator(clock=_clock).generate(blog_post)
    paths = {generated.stub: generated.path for generated in result.files}

    assert paths["backend/model"] == "app/Models/BlogPost.php"
    assert paths["backend/migration"] == (
        "database/migrations/2024_03_01_093015_create_blog_posts_table.php"
    )
    assert paths["backend/store.request"] == "app/Http/Requests/BlogPost/StoreBlogPostRequest.php"
    assert paths["frontend/service.hook"] == "resources/js/Services/blogPostServiceHook.ts"
    assert result.get_file("frontend/model").layer == "frontend"
    assert result.get_file("backend/unknown") is None


def test_options_disable_targets(blog_post) -> None:
    blog_post.options.generate_frontend = False
    blog_post.options.generate_requests = False

    generator = ScaffoldGenerator(clock=_clock)
    stubs = [target.stub for target in generator.plan(blog_post)]

    assert len(stubs) == 11
    assert "backend/store.request" not in stubs
    assert not any(stub.startswith("frontend/") for stub in stubs)


def test_invalid_model_raises() -> None:
    with pytest.raises(ModelValidationError):
        ScaffoldGenerator().generate(ModelDefinition(name="post"))


def test_generate_scaffold_reports_errors() -> None:
    result = generate_scaffold(ModelDefinition(name="post"))
    assert not result.success
    assert result.files == []
    assert isinstance(result.exception, ModelValidationError)
    assert "PascalCase" in result.error_message


def test_missing_stub_becomes_scaffold_error(blog_post, tmp_path) -> None:
    registry = StubRegistry()
    registry.register(StubTarget("backend/policy", "app/Policies/{{modelName}}Policy.php", "generate_model"))
    generator = ScaffoldGenerator(loader=StubLoader(default_dir=tmp_path), registry=registry)

    with pytest.raises(ScaffoldError, match="backend/policy"):
        generator.generate(blog_post)


def test_warnings_are_returned(blog_post) -> None:
    blog_post.attributes[2].default = "lots"
    result = ScaffoldGenerator(clock=_clock).generate(blog_post)

    assert result.success
    assert len(result.warnings) == 1
    factory = result.get_file("backend/factory").content
    assert "'views' => $this->faker->numberBetween(1, 1000)," in factory


def test_snake_naming_from_config(tmp_path) -> None:
    config = load_config({"relationship_naming": "snake"})
    result = scaffold_from_dict(
        {
            "name": "Order",
            "attributes": [{"name": "total", "type": "decimal"}],
            "relationships": [{"type": "hasMany", "relatedModel": "OrderItem"}],
        },
        config,
    )
    assert result.success
    assert "public function order_items()" in result.get_file("backend/model").content


def test_scaffold_from_dict_accepts_override_dict() -> None:
    result = scaffold_from_dict(
        {
            "name": "Order",
            "attributes": [{"name": "total", "type": "decimal"}],
            "relationships": [{"type": "hasMany", "relatedModel": "OrderItem"}],
        },
        {"relationshipNaming": "snake"},
    )
    assert result.metadata["relationship_naming"] == "snake"


def test_resolve_migration_time() -> None:
    assert resolve_migration_time(FIXED) is FIXED
    assert resolve_migration_time("2024-03-01 09:30:15") == FIXED
    assert isinstance(resolve_migration_time(), datetime)

    with pytest.raises(ScaffoldError):
        resolve_migration_time("xyzzy plugh")
