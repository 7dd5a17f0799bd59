"""Command-line entry point.

Usage::

    sigma-codegen app.json -o ./generated
    sigma-codegen app.yaml --template-dir ./templates --workers 4
    sigma-codegen app.json --preview
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import time
from pathlib import Path

import yaml
from pydantic import ValidationError

from sigma_codegen.config import Config
from sigma_codegen.errors import GenerationFailed
from sigma_codegen.orchestrator import DirectoryPublisher, GenerationOrchestrator
from sigma_codegen.spec.models import AppSpecification
from sigma_codegen.spec.store import InMemoryProjectStore, load_app_spec
from sigma_codegen.utils import (
    console,
    format_duration,
    print_error,
    print_success,
    print_summary_table,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sigma-codegen",
        description="Sigma code generator -- Flutter + Amplify project from an app specification",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  sigma-codegen app.json\n"
            "  sigma-codegen app.yaml -o ./generated --template-dir ./templates\n"
            "  sigma-codegen app.json --preview\n"
        ),
    )
    parser.add_argument("spec", help="Path to the app specification (JSON or YAML)")
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Output directory (default: SIGMA_OUTPUT_DIR or ./output)",
    )
    parser.add_argument(
        "--template-dir",
        default=None,
        help="Directory of *.j2 templates overriding the built-in set",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of concurrent generation workers",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="JSON configuration file saved with Config.save()",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Print the default screen source instead of generating the project",
    )
    return parser


def resolve_config(args: argparse.Namespace) -> Config:
    """Configuration file or environment, then command-line overrides."""
    config = Config.load(Path(args.config)) if args.config else Config.from_env()
    if args.output:
        config.output_dir = Path(args.output)
    if args.template_dir:
        config.template_dir = Path(args.template_dir)
    if args.workers is not None:
        config.orchestrator = config.orchestrator.model_copy(update={"workers": max(1, args.workers)})
    return config


async def run(app: AppSpecification, config: Config, *, preview: bool = False) -> int:
    """Generate (or preview) *app*; returns the process exit code."""
    store = InMemoryProjectStore([app])
    async with GenerationOrchestrator(store, config) as orchestrator:
        if preview:
            result = await orchestrator.generate_preview(app.id)
            console.print(result.source, markup=False, highlight=False)
            console.print(f"[dim]Preview reference: {result.preview_reference}[/dim]")
            return 0

        started = time.monotonic()
        handle = await orchestrator.request_generation(app.id)
        try:
            bundle = await handle.result()
        except GenerationFailed as exc:
            print_error(str(exc))
            return 1

        target = await orchestrator.publish(app.id, DirectoryPublisher(config.output_dir))
        download = orchestrator.get_download_reference(app.id)

    print_summary_table(
        {
            "App": f"{app.name} ({app.id})",
            "Package": app.package_name,
            "Screens": str(len(app.screens)),
            "Models": str(len(app.database_schema.tables)),
            "Files": str(len(bundle.files)),
            "Templates": orchestrator.engine.source,
            "Output": target,
            "Download": download.reference,
            "Duration": format_duration(time.monotonic() - started),
        },
        title="Code Generation",
    )
    print_success("Code generation completed successfully!")
    return 0


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``sigma-codegen``."""
    args = build_parser().parse_args(argv)

    spec_path = Path(args.spec)
    if not spec_path.exists():
        console.print(f"[bold red]Error:[/bold red] Specification file not found: {spec_path}")
        sys.exit(1)

    try:
        app = load_app_spec(spec_path)
    except (ValueError, ValidationError, yaml.YAMLError) as exc:
        console.print(f"[bold red]Error:[/bold red] Invalid specification {spec_path}: {exc}")
        sys.exit(1)

    code = asyncio.run(run(app, resolve_config(args), preview=args.preview))
    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
