"""Template engine with the code-generation helper library.

Quick usage::

    from sigma_codegen.templating import TemplateEngine

    engine = TemplateEngine.create("./templates")   # falls back to built-ins
    engine.compile("greeting", "Hello {{ name | pascal_case }}")
    engine.render("greeting", {"name": "task list"})  # "Hello TaskList"
"""

from sigma_codegen.templating.builtin import BUILTIN_TEMPLATES
from sigma_codegen.templating.engine import TemplateEngine
from sigma_codegen.templating.helpers import HELPERS

__all__ = [
    "BUILTIN_TEMPLATES",
    "HELPERS",
    "TemplateEngine",
]
