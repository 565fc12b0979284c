"""Shared pytest fixtures for the FlutterForge test suite.

Provides reusable fixtures for:
- Parsed field lists and template renderers
- Temporary Flutter project directories
- A recording Rich console for CLI output assertions
"""

from __future__ import annotations

from pathlib import Path

import pytest
from rich.console import Console

from flutter_forge.scaffolder.fields import FieldSpec, parse_field_specs
from flutter_forge.scaffolder.templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def clean_forge_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove every FORGE_* variable so configuration defaults are stable."""
    for name in (
        "FORGE_OUTPUT_DIR",
        "FORGE_ORG",
        "FORGE_ARCHITECTURE",
        "FORGE_STATE",
        "FORGE_INCLUDE_TESTS",
        "FORGE_INCLUDE_CI",
        "FORGE_USE_FREEZED",
    ):
        monkeypatch.delenv(name, raising=False)


# ---------------------------------------------------------------------------
# Engine inputs
# ---------------------------------------------------------------------------


@pytest.fixture
def task_fields() -> list[FieldSpec]:
    """A representative field list: required, nullable, defaulted, wire-keyed."""
    return parse_field_specs([
        "id:String",
        "title:String",
        "dueDate:DateTime?@due_date",
        "isDone:bool=false",
    ])


@pytest.fixture
def renderer() -> TemplateRenderer:
    """TemplateRenderer over the packaged templates."""
    return TemplateRenderer()


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------


@pytest.fixture
def flutter_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """An empty Flutter project (just a pubspec.yaml) set as the working directory."""
    project = tmp_path / "demo_app"
    project.mkdir()
    (project / "pubspec.yaml").write_text("name: demo_app\n", encoding="utf-8")
    monkeypatch.chdir(project)
    yield project


# ---------------------------------------------------------------------------
# Console
# ---------------------------------------------------------------------------


@pytest.fixture
def recording_console(monkeypatch: pytest.MonkeyPatch) -> Console:
    """Replace the shared Rich console with one that records output."""
    console = Console(record=True, width=200, force_terminal=False)
    monkeypatch.setattr("flutter_forge.utils.console", console)
    return console
