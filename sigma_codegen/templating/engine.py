"""Jinja2 template engine for code generation.

``TemplateEngine`` keeps a registry of named, pre-compiled templates.  Names
are registered once (from an external directory of ``*.j2`` files or from the
built-in fallback set) and then rendered any number of times with different
data.  Rendering is deterministic: the same ``(name, data)`` pair always
produces the same text.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jinja2 import Environment, Template

from sigma_codegen.errors import TemplateNotFound
from sigma_codegen.templating.builtin import BUILTIN_TEMPLATES
from sigma_codegen.templating.helpers import HELPERS
from sigma_codegen.utils import print_warning

TEMPLATE_SUFFIX = ".j2"


class TemplateEngine:
    """Compiles and renders named Jinja2 templates.

    Every helper in ``HELPERS`` is available both as a global function and
    as a filter inside templates.
    """

    def __init__(self) -> None:
        self.env = Environment(
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.globals.update(HELPERS)
        self.env.filters.update(HELPERS)
        self._templates: dict[str, Template] = {}
        self.source: str = "empty"

    # -- Construction ------------------------------------------------------

    @classmethod
    def create(cls, template_dir: str | Path | None = None) -> "TemplateEngine":
        """Build an engine from *template_dir*, or the built-in set if absent.

        The external directory wins when it exists and holds at least one
        ``*.j2`` file; otherwise the embedded templates are loaded.
        """
        engine = cls()
        directory = Path(template_dir) if template_dir is not None else None
        if directory is not None and directory.is_dir() and any(directory.glob(f"*{TEMPLATE_SUFFIX}")):
            engine.load_directory(directory)
            engine.source = str(directory)
        else:
            if directory is not None:
                print_warning(
                    f"Templates directory {directory} not found, using built-in templates"
                )
            engine.load_builtin()
            engine.source = "builtin"
        return engine

    def load_builtin(self) -> list[str]:
        """Compile every embedded template.  Returns the names registered."""
        for name, source in BUILTIN_TEMPLATES.items():
            self.compile(name, source)
        return sorted(BUILTIN_TEMPLATES)

    def load_directory(self, directory: str | Path) -> list[str]:
        """Compile every ``*.j2`` file in *directory* (non-recursive).

        The template name is the file name without the ``.j2`` suffix, so
        ``flutter-main.j2`` registers ``flutter-main``.
        """
        names: list[str] = []
        for path in sorted(Path(directory).glob(f"*{TEMPLATE_SUFFIX}")):
            name = path.name[: -len(TEMPLATE_SUFFIX)]
            self.compile(name, path.read_text(encoding="utf-8"))
            names.append(name)
        return names

    # -- Registry ----------------------------------------------------------

    def compile(self, name: str, source: str) -> None:
        """Compile *source* and register it under *name* (replacing any previous)."""
        self._templates[name] = self.env.from_string(source)

    def has_template(self, name: str) -> bool:
        return name in self._templates

    def template_names(self) -> list[str]:
        return sorted(self._templates)

    # -- Rendering ---------------------------------------------------------

    def render(self, name: str, data: Mapping[str, Any] | None = None) -> str:
        """Render the template registered as *name* against *data*.

        Raises:
            TemplateNotFound: If *name* was never compiled.
        """
        template = self._templates.get(name)
        if template is None:
            raise TemplateNotFound(name)
        return template.render(dict(data or {}))
