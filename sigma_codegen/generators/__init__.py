"""Source generators: Flutter UI, Amplify backend, CI workflow, admin dashboard.

Quick usage::

    from sigma_codegen.generators import FlutterGenerator, AmplifyGenerator
    from sigma_codegen.templating import TemplateEngine

    engine = TemplateEngine.create()
    files = {**FlutterGenerator(engine).generate(app), **AmplifyGenerator(engine).generate(app)}
"""

from sigma_codegen.generators.backend import AmplifyGenerator
from sigma_codegen.generators.components import emit_component
from sigma_codegen.generators.dashboard_gen import DashboardGenerator, ReadmeGenerator
from sigma_codegen.generators.mobile import FlutterGenerator
from sigma_codegen.generators.workflow_gen import WorkflowGenerator

__all__ = [
    "AmplifyGenerator",
    "DashboardGenerator",
    "FlutterGenerator",
    "ReadmeGenerator",
    "WorkflowGenerator",
    "emit_component",
]
