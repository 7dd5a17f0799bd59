"""Admin dashboard and project README generation.

The dashboard is a single static HTML document listing every data model and
its fields; the README summarises the generated project for whoever opens the
published repository.
"""

from __future__ import annotations

from typing import Any

from sigma_codegen.generators.backend import model_name
from sigma_codegen.generators.mobile import screen_entries
from sigma_codegen.spec.models import AppSpecification
from sigma_codegen.templating.engine import TemplateEngine

DASHBOARD_PATH = "admin/index.html"
README_PATH = "README.md"


def _tables_context(app: AppSpecification) -> list[dict[str, Any]]:
    return [
        {
            "name": table.name,
            "model_name": model_name(table.name),
            "field_count": len(table.user_fields()),
            "fields": [
                {
                    "name": field.name,
                    "type": field.type,
                    "required": field.required,
                    "unique": field.unique,
                }
                for field in table.user_fields()
            ],
        }
        for table in app.database_schema.tables
    ]


class DashboardGenerator:
    """Renders the admin dashboard document."""

    def __init__(self, engine: TemplateEngine) -> None:
        self.engine = engine

    def generate(self, app: AppSpecification) -> str:
        return self.engine.render(
            "admin-dashboard",
            {
                "app_name": app.name,
                "package_name": app.package_name,
                "primary_color": app.theme.primary_color,
                "tables": _tables_context(app),
            },
        )


class ReadmeGenerator:
    """Renders the top-level ``README.md`` of the generated project."""

    def __init__(self, engine: TemplateEngine) -> None:
        self.engine = engine

    def generate(self, app: AppSpecification) -> str:
        default = app.default_screen()
        return self.engine.render(
            "readme",
            {
                "app_name": app.name,
                "package_name": app.package_name,
                "description": app.description or "A Flutter application",
                "screens": [
                    {
                        "name": entry.screen.name,
                        "file_name": entry.file_name,
                        "is_home": entry.screen is default,
                    }
                    for entry in screen_entries(app)
                ],
                "tables": _tables_context(app),
            },
        )
