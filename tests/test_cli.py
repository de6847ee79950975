# -*- coding: utf-8 -*-
from __future__ import annotations

import json

import pytest

from forgemate.main import build_parser, main


MIGRATION_PATH = "database/migrations/2024_03_01_093015_create_blog_posts_table.php"


def test_parser_requires_a_command() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_render_stub_to_file(model_file, tmp_path) -> None:
    output = tmp_path / "out" / "BlogPost.php"
    code = main(["render", str(model_file), "--stub", "backend/model", "--output", str(output)])

    assert code == 0
    content = output.read_text(encoding="utf-8")
    assert "class BlogPost extends Model" in content
    assert "public function comments()" in content


def test_render_template_file_plain(model_file, tmp_path, capsys) -> None:
    template = tmp_path / "custom.txt"
    template.write_text("{{modelName}}:{{tableName}}", encoding="utf-8")

    code = main(["render", str(model_file), "--template", str(template), "--plain"])

    assert code == 0
    assert "BlogPost:blog_posts" in capsys.readouterr().out


def test_render_with_snake_naming(model_file, tmp_path) -> None:
    template = tmp_path / "rel.txt"
    template.write_text("{{resourceRelationships}}", encoding="utf-8")
    output = tmp_path / "rel.out"

    code = main(
        [
            "--relationship-naming",
            "snake",
            "render",
            str(model_file),
            "--template",
            str(template),
            "-o",
            str(output),
        ]
    )

    assert code == 0
    assert "'comments' => CommentResource::collection" in output.read_text(encoding="utf-8")


def test_custom_stub_from_project(model_file, tmp_path) -> None:
    stubs = tmp_path / "project" / "stubs" / "scaffold" / "backend"
    stubs.mkdir(parents=True)
    (stubs / "model.stub").write_text("// custom {{modelName}}", encoding="utf-8")
    output = tmp_path / "model.php"

    code = main(
        [
            "--project-path",
            str(tmp_path / "project"),
            "--use-custom-stubs",
            "render",
            str(model_file),
            "--stub",
            "backend/model",
            "-o",
            str(output),
        ]
    )

    assert code == 0
    assert output.read_text(encoding="utf-8") == "// custom BlogPost"


def test_scaffold_writes_files(model_file, tmp_path) -> None:
    out = tmp_path / "app"
    args = [
        "scaffold",
        str(model_file),
        "--output-dir",
        str(out),
        "--migration-date",
        "2024-03-01 09:30:15",
    ]

    assert main(args) == 0
    assert (out / "app/Models/BlogPost.php").exists()
    assert (out / MIGRATION_PATH).exists()
    assert (out / "resources/js/Services/blogPostServiceHook.ts").exists()

    model_path = out / "app/Models/BlogPost.php"
    model_path.write_text("edited", encoding="utf-8")

    assert main(args) == 0
    assert model_path.read_text(encoding="utf-8") == "edited"

    assert main(args + ["--force"]) == 0
    assert "class BlogPost" in model_path.read_text(encoding="utf-8")


def test_scaffold_dry_run_writes_nothing(model_file, tmp_path, capsys, monkeypatch) -> None:
    monkeypatch.setenv("COLUMNS", "200")
    out = tmp_path / "app"
    code = main(["scaffold", str(model_file), "--output-dir", str(out), "--dry-run"])

    assert code == 0
    assert not out.exists()
    assert "backend/model" in capsys.readouterr().out


def test_invalid_model_fails(tmp_path, capsys) -> None:
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"name": "post", "attributes": []}), encoding="utf-8")

    assert main(["render", str(path), "--stub", "backend/model"]) == 1
    out = capsys.readouterr().out
    assert "PascalCase" in out
    assert "At least one attribute is required" in out


@pytest.mark.parametrize(
    "argv",
    [
        ["render", "missing.json", "--stub", "backend/model"],
        ["render", "--stub", "backend/model"],
        ["scaffold"],
    ],
)
def test_missing_model_source_fails(argv, tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert main(argv) == 1


def test_model_file_and_url_are_exclusive(model_file) -> None:
    argv = ["render", str(model_file), "--url", "http://example.com/m.json", "--stub", "backend/model"]
    assert main(argv) == 1


def test_unknown_stub_fails(model_file) -> None:
    assert main(["render", str(model_file), "--stub", "backend/nope"]) == 1


def test_bad_migration_date_fails(model_file, tmp_path) -> None:
    argv = ["scaffold", str(model_file), "--output-dir", str(tmp_path), "--migration-date", "xyzzy plugh"]
    assert main(argv) == 1


def test_names_command(capsys, monkeypatch) -> None:
    monkeypatch.setenv("COLUMNS", "200")
    assert main(["names", "Person"]) == 0
    out = capsys.readouterr().out
    assert "People" in out
    assert "people" in out


def test_stubs_command(capsys, monkeypatch) -> None:
    monkeypatch.setenv("COLUMNS", "200")
    assert main(["stubs"]) == 0
    out = capsys.readouterr().out
    assert "backend/model" in out
    assert "frontend/service.hook" in out


def test_scaffold_collects_warnings_once(tmp_path, monkeypatch, capsys) -> None:
    monkeypatch.setenv("COLUMNS", "200")
    import forgemate.cli
    import forgemate.scaffold.core.generator
    from forgemate.scaffold.core.schema import collect_warnings

    calls = []

    def counting_collect(model):
        calls.append(model.name)
        return collect_warnings(model)

    monkeypatch.setattr(forgemate.cli, "collect_warnings", counting_collect)
    monkeypatch.setattr(forgemate.scaffold.core.generator, "collect_warnings", counting_collect)

    path = tmp_path / "post.json"
    path.write_text(
        json.dumps(
            {"name": "Post", "attributes": [{"name": "views", "type": "integer", "default": "lots"}]}
        ),
        encoding="utf-8",
    )

    assert main(["scaffold", str(path), "--output-dir", str(tmp_path / "out")]) == 0
    assert calls == ["Post"]
    assert capsys.readouterr().out.count("is not a valid integer") == 1
