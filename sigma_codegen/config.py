"""Sigma code generator configuration.

Centralised, typed configuration for the generation service. All settings use
Pydantic v2 models so they can be validated at construction time and serialised
to/from JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class OrchestratorConfig(BaseModel):
    """Tuning knobs for the generation orchestrator."""

    workers: int = Field(
        default=2, ge=1, description="Number of generation jobs processed concurrently"
    )
    preview_base_url: str = Field(
        default="https://sigma-preview.com",
        description="Prefix for preview references returned to callers",
    )
    download_base_url: str = Field(
        default="https://sigma-downloads.s3.amazonaws.com",
        description="Prefix for download references of completed bundles",
    )


class CIConfig(BaseModel):
    """Values baked into the generated GitHub Actions workflow."""

    flutter_version: str = Field(default="3.22.0")
    aws_region: str = Field(default="us-east-1")


class Config(BaseModel):
    """Global Sigma code generator configuration.

    Instances are typically created once by the CLI entry point (or by the
    embedding service) and handed to ``GenerationOrchestrator``.
    """

    template_dir: Path = Field(
        default=Path("./templates"),
        description="Directory of *.j2 templates overriding the built-in set",
    )
    output_dir: Path = Field(default=Path("./output"))
    orchestrator: OrchestratorConfig = Field(default_factory=OrchestratorConfig)
    ci: CIConfig = Field(default_factory=CIConfig)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path | None = None) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Defaults to ``<output_dir>/sigma-config.json``.

        Returns:
            The resolved path where the file was written.
        """
        target = path or (self.output_dir / "sigma-config.json")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            SIGMA_TEMPLATE_DIR, SIGMA_OUTPUT_DIR, SIGMA_WORKERS,
            SIGMA_PREVIEW_BASE_URL, SIGMA_DOWNLOAD_BASE_URL,
            SIGMA_FLUTTER_VERSION, SIGMA_AWS_REGION.
        """
        orchestrator_kwargs: dict[str, Any] = {}
        if os.environ.get("SIGMA_WORKERS"):
            orchestrator_kwargs["workers"] = int(os.environ["SIGMA_WORKERS"])
        if os.environ.get("SIGMA_PREVIEW_BASE_URL"):
            orchestrator_kwargs["preview_base_url"] = os.environ["SIGMA_PREVIEW_BASE_URL"]
        if os.environ.get("SIGMA_DOWNLOAD_BASE_URL"):
            orchestrator_kwargs["download_base_url"] = os.environ["SIGMA_DOWNLOAD_BASE_URL"]

        ci_kwargs: dict[str, Any] = {}
        if os.environ.get("SIGMA_FLUTTER_VERSION"):
            ci_kwargs["flutter_version"] = os.environ["SIGMA_FLUTTER_VERSION"]
        if os.environ.get("SIGMA_AWS_REGION"):
            ci_kwargs["aws_region"] = os.environ["SIGMA_AWS_REGION"]

        return cls(
            template_dir=Path(os.environ.get("SIGMA_TEMPLATE_DIR", "./templates")),
            output_dir=Path(os.environ.get("SIGMA_OUTPUT_DIR", "./output")),
            orchestrator=OrchestratorConfig(**orchestrator_kwargs),
            ci=CIConfig(**ci_kwargs),
        )
