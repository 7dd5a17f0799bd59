"""Publishing targets for finished bundles."""

from __future__ import annotations

import asyncio
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from sigma_codegen.spec.models import AppSpecification
from sigma_codegen.utils import sanitize_name, write_text_file

if TYPE_CHECKING:
    from sigma_codegen.orchestrator.service import GeneratedBundle


@runtime_checkable
class Publisher(Protocol):
    """Anything that can take a bundle somewhere and report where it went."""

    async def publish(self, app: AppSpecification, bundle: "GeneratedBundle") -> str:
        ...


def safe_relative_path(path: str) -> PurePosixPath:
    """Validate a bundle path; absolute paths and ``..`` segments are rejected."""
    candidate = PurePosixPath(path)
    if not path or candidate.is_absolute() or ".." in candidate.parts:
        raise ValueError(f"Refusing to publish unsafe path: {path!r}")
    return candidate


class DirectoryPublisher:
    """Writes every bundle file below ``<root>/<sanitized app name>/``."""

    def __init__(self, root: Path, *, per_app_directory: bool = True) -> None:
        self.root = Path(root)
        self.per_app_directory = per_app_directory

    def target_for(self, app: AppSpecification) -> Path:
        if not self.per_app_directory:
            return self.root
        return self.root / (sanitize_name(app.name) or sanitize_name(app.id) or "app")

    async def publish(self, app: AppSpecification, bundle: "GeneratedBundle") -> str:
        target = self.target_for(app)
        # Validate everything before writing anything.
        relative = {path: safe_relative_path(path) for path in bundle.files}
        for path, rel in relative.items():
            await asyncio.to_thread(write_text_file, target.joinpath(*rel.parts), bundle.files[path])
        return str(target)
