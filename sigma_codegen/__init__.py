"""Sigma code generator.

Turns a declarative app specification (screens, components, data schema,
theme) into a Flutter mobile project with an Amplify Gen 2 backend, a GitHub
Actions deployment workflow and a static admin dashboard.
"""

from sigma_codegen.config import Config
from sigma_codegen.errors import (
    AppNotFound,
    GenerationFailed,
    JobConflict,
    JobNotFound,
    NotAvailable,
    SigmaError,
    TemplateNotFound,
)
from sigma_codegen.orchestrator import GenerationOrchestrator
from sigma_codegen.spec import AppSpecification
from sigma_codegen.templating import TemplateEngine

__version__ = "0.1.0"

__all__ = [
    "AppNotFound",
    "AppSpecification",
    "Config",
    "GenerationFailed",
    "GenerationOrchestrator",
    "JobConflict",
    "JobNotFound",
    "NotAvailable",
    "SigmaError",
    "TemplateEngine",
    "TemplateNotFound",
]
