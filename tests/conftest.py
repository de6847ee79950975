# -*- coding: utf-8 -*-
from __future__ import annotations

import json

import pytest

from forgemate.scaffold.core.schema import ModelDefinition


BLOG_POST = {
    "name": "BlogPost",
    "attributes": [
        {"name": "title", "type": "string", "maxLength": 200},
        {"name": "body", "type": "text"},
        {"name": "views", "type": "integer", "unsigned": True, "default": "0"},
        {"name": "published", "type": "boolean", "defaultValue": "true"},
        {"name": "meta", "type": "json", "nullable": True},
    ],
    "relationships": [
        {"type": "belongsTo", "relatedModel": "User"},
        {"type": "hasMany", "relatedModel": "Comment"},
        {
            "type": "belongsToMany",
            "relatedModel": "Tag",
            "pivot": "post_tag",
            "pivotForeignKey": "post_id",
            "pivotRelatedKey": "tag_id",
        },
    ],
    "softDeletes": True,
}


@pytest.fixture
def blog_post_data() -> dict:
    return json.loads(json.dumps(BLOG_POST))


@pytest.fixture
def blog_post(blog_post_data) -> ModelDefinition:
    return ModelDefinition.from_dict(blog_post_data)


@pytest.fixture
def model_file(tmp_path, blog_post_data):
    path = tmp_path / "blog_post.json"
    path.write_text(json.dumps(blog_post_data), encoding="utf-8")
    return path
