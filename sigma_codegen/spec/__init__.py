"""App specification models and project-store collaborators.

Usage::

    from sigma_codegen.spec import AppSpecification, InMemoryProjectStore

    store = InMemoryProjectStore()
    store.add({"id": "app-1", "name": "Task Tracker", "screens": [...]})
    app = await store.get_app("app-1")
"""

from sigma_codegen.spec.models import (
    Action,
    AppSpecification,
    Component,
    ComponentType,
    DatabaseField,
    DatabaseSchema,
    DatabaseTable,
    FieldType,
    NavigationConfig,
    Position,
    Screen,
    Size,
    Theme,
    derive_package_name,
)
from sigma_codegen.spec.store import (
    FileProjectStore,
    InMemoryProjectStore,
    ProjectStore,
    load_app_spec,
)

__all__ = [
    "Action",
    "AppSpecification",
    "Component",
    "ComponentType",
    "DatabaseField",
    "DatabaseSchema",
    "DatabaseTable",
    "FieldType",
    "FileProjectStore",
    "InMemoryProjectStore",
    "NavigationConfig",
    "Position",
    "ProjectStore",
    "Screen",
    "Size",
    "Theme",
    "derive_package_name",
    "load_app_spec",
]
