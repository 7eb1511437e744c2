"""Tests for the typer command-line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from mvcgen import __version__
from mvcgen.cli import app

runner = CliRunner()


@pytest.fixture
def answers_file(tmp_path: Path) -> Path:
    path = tmp_path / "answers.yaml"
    path.write_text(
        "db_name: shop\n"
        "db_mode: atlas\n"
        "db_host: cluster0.example.mongodb.net\n"
        "db_username: u\n"
        "db_password: p\n"
        "view_engine: pug\n"
    )
    return path


def test_version() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_defaults_run(tmp_path: Path) -> None:
    result = runner.invoke(app, ["blog", "--yes", "-o", str(tmp_path)])

    assert result.exit_code == 0, result.output
    root = tmp_path / "blog"
    assert json.loads((root / "package.json").read_text())["name"] == "blog"
    assert "MONGODB_URI=mongodb://localhost:27017/mvc-app" in (root / ".env").read_text()
    assert (root / "views" / "layouts" / "main.ejs").is_file()
    assert "created successfully" in result.output
    assert "npm install" in result.output


def test_default_project_name(tmp_path: Path) -> None:
    result = runner.invoke(app, ["--yes", "-o", str(tmp_path)])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "my-mvc-app" / "app.js").is_file()


def test_answers_file(tmp_path: Path, answers_file: Path) -> None:
    out = tmp_path / "out"
    result = runner.invoke(app, ["shop", "--yes", "-a", str(answers_file), "-o", str(out)])

    assert result.exit_code == 0, result.output
    env = (out / "shop" / ".env").read_text()
    assert (
        "MONGODB_URI=mongodb+srv://u:p@cluster0.example.mongodb.net/shop"
        "?retryWrites=true&w=majority"
    ) in env
    assert not (out / "shop" / "views" / "index.ejs").exists()


def test_interactive_defaults(tmp_path: Path) -> None:
    # db_name, db_mode, db_host, db_port, db_username, view_engine
    result = runner.invoke(app, ["blog", "-o", str(tmp_path)], input="\n" * 6)

    assert result.exit_code == 0, result.output
    assert "mongodb://localhost:27017/mvc-app" in (tmp_path / "blog" / ".env").read_text()


def test_dry_run_writes_nothing(tmp_path: Path) -> None:
    result = runner.invoke(app, ["blog", "--yes", "--dry-run", "-o", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert "Dry run" in result.output
    assert "package.json" in result.output
    assert list(tmp_path.iterdir()) == []


def test_existing_directory_rejected(tmp_path: Path) -> None:
    (tmp_path / "blog").mkdir()
    (tmp_path / "blog" / "keep.txt").write_text("mine")

    result = runner.invoke(app, ["blog", "--yes", "-o", str(tmp_path)])
    assert result.exit_code == 1
    assert "Error" in result.output
    assert "not empty" in result.output

    forced = runner.invoke(app, ["blog", "--yes", "--force", "-o", str(tmp_path)])
    assert forced.exit_code == 0, forced.output
    assert (tmp_path / "blog" / "keep.txt").read_text() == "mine"


def test_invalid_preset_aborts_before_writing(tmp_path: Path) -> None:
    answers = tmp_path / "answers.yaml"
    answers.write_text("db_mode: custom\nmongo_uri: postgres://bad\n")
    out = tmp_path / "out"

    result = runner.invoke(app, ["app", "--yes", "-a", str(answers), "-o", str(out)])
    assert result.exit_code == 1
    assert "mongo_uri" in result.output
    assert not out.exists()


def test_invalid_project_name(tmp_path: Path) -> None:
    result = runner.invoke(app, ["../escape", "--yes", "-o", str(tmp_path)])
    assert result.exit_code == 1
    assert "project_name" in result.output


def test_aborted_input_writes_nothing(tmp_path: Path) -> None:
    # Input ends before every question is answered
    result = runner.invoke(app, ["blog", "-o", str(tmp_path)], input="\n")

    assert result.exit_code == 130
    assert list(tmp_path.iterdir()) == []


def test_dry_run_checks_existing_directory(tmp_path: Path) -> None:
    (tmp_path / "blog").mkdir()
    (tmp_path / "blog" / "keep.txt").write_text("mine")

    real = runner.invoke(app, ["blog", "--yes", "-o", str(tmp_path)])
    dry = runner.invoke(app, ["blog", "--yes", "--dry-run", "-o", str(tmp_path)])
    assert dry.exit_code == real.exit_code == 1
    assert "not empty" in dry.output

    forced = runner.invoke(app, ["blog", "--yes", "--dry-run", "--force", "-o", str(tmp_path)])
    assert forced.exit_code == 0, forced.output
    assert sorted(p.name for p in (tmp_path / "blog").iterdir()) == ["keep.txt"]
