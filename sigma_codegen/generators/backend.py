"""Amplify Gen 2 backend generation from the database schema.

Emits the data model definition (one model per table), the auth and storage
resources, and the ``backend.ts`` file wiring the three together.  Field
emission is a fixed type table plus constraint clauses appended in a fixed
order, so identical input always yields byte-identical output.
"""

from __future__ import annotations

import json
import re
from typing import Any

from sigma_codegen.spec.models import AppSpecification, DatabaseField, DatabaseSchema, FieldType
from sigma_codegen.templating.engine import TemplateEngine
from sigma_codegen.templating.helpers import camel_case, pascal_case

# Logical field type -> Amplify ``a.<primitive>()`` builder.
AMPLIFY_TYPES: dict[FieldType, str] = {
    FieldType.STRING: "string",
    FieldType.TEXT: "string",
    FieldType.INTEGER: "integer",
    FieldType.FLOAT: "float",
    FieldType.DECIMAL: "float",
    FieldType.CURRENCY: "float",
    FieldType.BOOLEAN: "boolean",
    FieldType.DATE: "date",
    FieldType.DATETIME: "datetime",
    FieldType.TIME: "time",
    FieldType.EMAIL: "email",
    FieldType.URL: "url",
    FieldType.PHONE: "phone",
    FieldType.JSON: "json",
    FieldType.LOCATION: "json",
    FieldType.UUID: "id",
    FieldType.PASSWORD: "string",
    FieldType.FILE: "string",
    FieldType.IMAGE: "string",
}

DEFAULT_AMPLIFY_TYPE = "string"

_TS_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def map_field_type(field: DatabaseField) -> str:
    """Amplify primitive for *field*; unknown logical types map to ``string``."""
    logical = field.logical_type
    return AMPLIFY_TYPES.get(logical, DEFAULT_AMPLIFY_TYPE) if logical else DEFAULT_AMPLIFY_TYPE


def ts_literal(value: Any) -> str:
    """Render a default value as a TypeScript literal."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def field_constraints(field: DatabaseField) -> str:
    """Constraint clauses in the fixed order required, unique, maxLength,
    minLength, min, max, pattern, default."""
    clauses: list[str] = []
    if field.required:
        clauses.append(".required()")
    if field.unique:
        clauses.append(".unique()")
    if field.max_length:
        clauses.append(f".maxLength({field.max_length})")
    if field.min_length:
        clauses.append(f".minLength({field.min_length})")
    if field.min is not None:
        clauses.append(f".min({ts_literal(field.min)})")
    if field.max is not None:
        clauses.append(f".max({ts_literal(field.max)})")
    if field.pattern:
        clauses.append(f".pattern({json.dumps(field.pattern, ensure_ascii=False)})")
    if field.default is not None:
        clauses.append(f".default({ts_literal(field.default)})")
    return "".join(clauses)


def ts_key(name: str) -> str:
    """Object key for *name*, quoted when it is not a plain identifier."""
    return name if _TS_IDENTIFIER.match(name) else json.dumps(name, ensure_ascii=False)


def emit_field(field: DatabaseField) -> str:
    """One model property line, e.g. ``title: a.string().required()``."""
    return f"{ts_key(field.name)}: a.{map_field_type(field)}(){field_constraints(field)}"


def model_name(table_name: str) -> str:
    return pascal_case(table_name) or "Model"


class AmplifyGenerator:
    """Maps the relational schema to Amplify backend resources."""

    def __init__(self, engine: TemplateEngine) -> None:
        self.engine = engine

    def generate(self, app: AppSpecification) -> dict[str, str]:
        """Return ``{path: source}`` for the ``amplify/`` directory."""
        return {
            "amplify/data/resource.ts": self.generate_data_schema(app.database_schema),
            "amplify/auth/resource.ts": self.engine.render("amplify-auth", {}),
            "amplify/storage/resource.ts": self.engine.render(
                "amplify-storage", {"storage_name": self.storage_name(app)}
            ),
            "amplify/backend.ts": self.engine.render("amplify-backend", {}),
        }

    def generate_data_schema(self, schema: DatabaseSchema) -> str:
        models = [
            {
                "name": model_name(table.name),
                "table_name": table.name,
                "fields": [
                    {
                        "name": ts_key(field.name),
                        "primitive": map_field_type(field),
                        "constraints": field_constraints(field),
                    }
                    for field in table.user_fields()
                ],
            }
            for table in schema.tables
        ]
        return self.engine.render("amplify-data", {"models": models})

    @staticmethod
    def storage_name(app: AppSpecification) -> str:
        return f"{camel_case(app.name) or 'app'}Files"
