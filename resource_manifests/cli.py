"""CLI entry point for resource-manifests, built on typer.

Provides ``render``, ``preview`` and ``templates`` commands.

Usage::

    python -m resource_manifests --help
    python -m resource_manifests render plan.yaml
    python -m resource_manifests render plan.yaml --out-dir build/ --process-env
    python -m resource_manifests preview plan.yaml
    python -m resource_manifests templates --template-dir ./templates
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

import typer
import yaml
from pydantic import ValidationError

from resource_manifests import ui
from resource_manifests.config.plans import (
    build_environment,
    build_factory,
    build_resources,
    load_plan,
)
from resource_manifests.errors import ManifestError, PlanError
from resource_manifests.render.environment import set_system_property
from resource_manifests.render.factory import SimpleTemplateFactory
from resource_manifests.render.renderer import render_all, write_manifests
from resource_manifests.render.resource import Resource

EXIT_SUCCESS = 0
EXIT_RENDER_FAILURE = 1
EXIT_PLAN_ERROR = 2

app = typer.Typer(
    name="resource-manifests",
    help="Render YAML deployment manifests from resource templates.",
    no_args_is_help=True,
    add_completion=False,
)


def _parse_pairs(pairs: Optional[List[str]], option: str) -> Dict[str, str]:
    """Parse ``key=value`` strings; raise ``typer.BadParameter`` otherwise."""
    parsed: Dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected key=value, got {pair!r}", param_hint=option)
        parsed[key] = value
    return parsed


def _load_or_exit(plan: Path):
    try:
        return load_plan(plan)
    except FileNotFoundError as exc:
        ui.error_msg(str(exc))
        raise typer.Exit(EXIT_PLAN_ERROR) from exc
    except (yaml.YAMLError, ValidationError) as exc:
        ui.error_panel("Invalid plan", str(exc))
        raise typer.Exit(EXIT_PLAN_ERROR) from exc


def _resources_or_exit(loaded) -> List[Resource]:
    try:
        return build_resources(loaded)
    except PlanError as exc:
        ui.error_msg(str(exc))
        raise typer.Exit(EXIT_PLAN_ERROR) from exc


# ── render command ───────────────────────────────────────────────────────────


@app.command()
def render(
    plan: Path = typer.Argument(..., help="Path to a render plan YAML."),
    out_dir: Optional[Path] = typer.Option(
        None,
        "--out-dir",
        "-o",
        help="Write one <name>.yaml per resource instead of printing.",
    ),
    process_env: bool = typer.Option(
        False,
        "--process-env",
        help="Fall back to OS environment variables and -D properties.",
    ),
    set_values: Optional[List[str]] = typer.Option(
        None,
        "--set",
        help="Add key=value to the plan environment. Repeatable.",
    ),
    define: Optional[List[str]] = typer.Option(
        None,
        "-D",
        "--define",
        help="Set a process property key=value (used with --process-env).",
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
) -> None:
    """Render every resource in PLAN.

    Exit codes: 0 = success, 1 = render failure, 2 = plan error.
    """
    if debug:
        logging.basicConfig(level=logging.DEBUG)

    overrides = _parse_pairs(set_values, "--set")
    for key, value in _parse_pairs(define, "--define").items():
        set_system_property(key, value)

    loaded = _load_or_exit(plan)
    env = build_environment(loaded, process=process_env, overrides=overrides)
    factory = build_factory(loaded, env)
    resources = _resources_or_exit(loaded)

    try:
        if out_dir is None:
            typer.echo(render_all(resources, factory), nl=False)
        else:
            for path in write_manifests(resources, factory, out_dir):
                ui.ok(f"Wrote {path}")
    except ManifestError as exc:
        ui.error_msg(str(exc))
        raise typer.Exit(EXIT_RENDER_FAILURE) from exc


# ── preview command ──────────────────────────────────────────────────────────


@app.command()
def preview(
    plan: Path = typer.Argument(..., help="Path to a render plan YAML."),
) -> None:
    """Render PLAN, leaving unresolved placeholders as {{key}}."""
    loaded = _load_or_exit(plan)
    env = build_environment(loaded, passthrough=True)
    factory = build_factory(loaded, env)
    resources = _resources_or_exit(loaded)

    try:
        typer.echo(render_all(resources, factory), nl=False)
    except ManifestError as exc:
        ui.error_msg(str(exc))
        raise typer.Exit(EXIT_RENDER_FAILURE) from exc


# ── templates command ────────────────────────────────────────────────────────


@app.command()
def templates(
    template_dir: Optional[List[Path]] = typer.Option(
        None,
        "--template-dir",
        help="Extra template directory to search. Repeatable.",
    ),
) -> None:
    """List available template ids."""
    factory = SimpleTemplateFactory(template_dirs=template_dir or [])
    names = factory.available_templates()
    if not names:
        ui.info("No templates found.")
        return
    for name in names:
        typer.echo(name)


# ── Entry point ──────────────────────────────────────────────────────────────


def main() -> int:
    """Run the CLI and return an exit code."""
    try:
        app()
        return 0
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 0


if __name__ == "__main__":
    sys.exit(main())
