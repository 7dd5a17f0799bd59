"""Shared pytest fixtures for the sigma-codegen test suite.

Provides reusable fixtures for:
- A representative app specification (two screens, one table)
- A template engine loaded with the built-in template set
- Project stores pre-populated with the sample app
- Configurations that never touch the working directory
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

import pytest

from sigma_codegen.config import Config, OrchestratorConfig
from sigma_codegen.spec.models import AppSpecification
from sigma_codegen.spec.store import InMemoryProjectStore
from sigma_codegen.templating.engine import TemplateEngine


# ---------------------------------------------------------------------------
# App specifications
# ---------------------------------------------------------------------------

SAMPLE_APP: dict[str, Any] = {
    "id": "app-1",
    "name": "Task Tracker",
    "description": "Track tasks",
    "theme": {
        "primaryColor": "#3F51B5",
        "secondaryColor": "#FF4081",
        "fontFamily": "Inter",
        "darkMode": False,
    },
    "databaseSchema": {
        "tables": [
            {
                "id": "t1",
                "name": "tasks",
                "fields": [
                    {"name": "id", "type": "uuid", "required": True},
                    {"name": "title", "type": "string", "required": True, "maxLength": 120},
                    {"name": "notes", "type": "text"},
                    {"name": "due_date", "type": "date"},
                    {"name": "priority", "type": "integer", "min": 1, "max": 5, "default": 3},
                    {"name": "owner_email", "type": "email", "unique": True},
                ],
            }
        ]
    },
    "screens": [
        {
            "id": "s1",
            "name": "Home",
            "isDefault": True,
            "components": [
                {
                    "id": "c1",
                    "type": "text",
                    "position": {"x": 16, "y": 24},
                    "properties": {"text": "My Tasks", "fontSize": 24, "fontWeight": "bold"},
                },
                {
                    "id": "c2",
                    "type": "list",
                    "position": {"x": 0, "y": 80},
                    "size": {"width": 360, "height": 400},
                    "properties": {
                        "dataSource": "tasks",
                        "titleField": "title",
                        "subtitleField": "notes",
                    },
                    "actions": [{"trigger": "onTap", "type": "navigate", "target": "task_form"}],
                },
                {
                    "id": "c3",
                    "type": "button",
                    "position": {"x": 16, "y": 500},
                    "properties": {"text": "New Task"},
                    "actions": [
                        {"trigger": "onPressed", "type": "navigate", "target": "task_form"}
                    ],
                },
            ],
        },
        {
            "id": "s2",
            "name": "Task Form",
            "navigation": {"type": "stack", "showHeader": True, "headerTitle": "New Task"},
            "components": [
                {
                    "id": "task-form",
                    "type": "form",
                    "position": {"x": 0, "y": 0},
                    "properties": {"tableName": "tasks", "submitLabel": "Save"},
                    "actions": [{"trigger": "onSubmit", "type": "navigate", "target": "home"}],
                }
            ],
        },
    ],
}


@pytest.fixture
def sample_app_data() -> dict[str, Any]:
    """Raw camelCase document for the sample app (safe to mutate)."""
    return copy.deepcopy(SAMPLE_APP)


@pytest.fixture
def sample_app(sample_app_data: dict[str, Any]) -> AppSpecification:
    return AppSpecification.model_validate(sample_app_data)


@pytest.fixture
def empty_app() -> AppSpecification:
    """An app with no screens, tables or theme."""
    return AppSpecification.model_validate({"id": "empty", "name": "Empty"})


@pytest.fixture
def sample_spec_file(tmp_path: Path, sample_app_data: dict[str, Any]) -> Path:
    path = tmp_path / "task-tracker.json"
    path.write_text(json.dumps(sample_app_data, indent=2), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------


@pytest.fixture
def engine() -> TemplateEngine:
    """Engine loaded with the built-in template set."""
    return TemplateEngine.create()


@pytest.fixture
def project_store(sample_app: AppSpecification) -> InMemoryProjectStore:
    return InMemoryProjectStore([sample_app])


@pytest.fixture
def config(tmp_path: Path) -> Config:
    return Config(
        template_dir=tmp_path / "no-templates",
        output_dir=tmp_path / "output",
        orchestrator=OrchestratorConfig(workers=2),
    )
