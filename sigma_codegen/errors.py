"""Exception hierarchy for the code-generation pipeline.

Every error raised on purpose by ``sigma_codegen`` derives from
``SigmaError`` so that API layers can map the whole family in one place.
"""

from __future__ import annotations


class SigmaError(Exception):
    """Base class for all code-generation errors."""


class AppNotFound(SigmaError, LookupError):
    """Raised when the project store has no app with the requested id."""

    def __init__(self, app_id: str) -> None:
        self.app_id = app_id
        super().__init__(f"App not found: {app_id}")


class TemplateNotFound(SigmaError, LookupError):
    """Raised when rendering a template name that was never compiled."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Template {name} not found")


class JobNotFound(SigmaError, LookupError):
    """Raised when querying an app id that has no generation history."""

    def __init__(self, app_id: str) -> None:
        self.app_id = app_id
        super().__init__(f"Generation status not found for app {app_id}")


class NotAvailable(SigmaError):
    """Raised when generated code is requested before a run has completed."""

    def __init__(self, app_id: str, status: str | None = None) -> None:
        self.app_id = app_id
        self.status = status
        detail = f" (status: {status})" if status else ""
        super().__init__(f"Generated code not available for app {app_id}{detail}")


class GenerationFailed(SigmaError):
    """Raised when a generation run fails inside the worker."""

    def __init__(self, app_id: str, message: str) -> None:
        self.app_id = app_id
        super().__init__(f"Generation failed for app {app_id}: {message}")


class JobConflict(SigmaError):
    """Raised when a run cannot take ownership of the job recorded for an app."""

    def __init__(self, app_id: str, job_id: str, reason: str) -> None:
        self.app_id = app_id
        self.job_id = job_id
        self.reason = reason
        super().__init__(f"Generation job {job_id} for app {app_id} {reason}")
