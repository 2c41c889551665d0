"""Command line entry point for create-project.

Usage::

    create-project ./my-app --template react -o eslint -o vitest
    create-project ./my-lib -t react-lib --recommended --overwrite
    python -m create_project --list-templates
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Sequence

from pydantic import ValidationError
from rich.table import Table

from create_project import __version__
from create_project.config import Config
from create_project.errors import ScaffoldError
from create_project.resolver import SECTIONS
from create_project.scaffolder import ProjectGenerator, ScaffoldRequest, ScaffoldResult
from create_project.scaffolder.paths import (
    DEFAULT_PACKAGE_NAME,
    is_valid_package_name,
    project_name_from_path,
)
from create_project.templates import TEMPLATES, get_template
from create_project.utils import (
    console,
    print_error,
    print_header,
    print_success,
    print_summary_table,
    print_warning,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="create-project",
        description="Create a new TypeScript project from a bundled template.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  create-project ./my-app -t node -o eslint -o prettier\n"
            "  create-project ./my-app -t react --recommended -o vitest\n"
            "  create-project --list-templates\n"
        ),
    )
    parser.add_argument(
        "directory",
        nargs="?",
        help=f"Target directory (default: ./{DEFAULT_PACKAGE_NAME})",
    )
    parser.add_argument("--template", "-t", default="node", help="Template to use (default: node)")
    parser.add_argument(
        "--option",
        "-o",
        dest="options",
        action="append",
        default=[],
        metavar="OPTION",
        help="Option to enable; may be repeated",
    )
    parser.add_argument(
        "--recommended",
        action="store_true",
        help="Enable the template's recommended options",
    )
    parser.add_argument("--name", default=None, help="Package name (default: directory name)")
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Remove existing files in the target directory",
    )
    parser.add_argument(
        "--strict-versions",
        action="store_true",
        help="Fail when a dependency has no known version",
    )
    parser.add_argument(
        "--list-templates",
        action="store_true",
        help="List the available templates and their options, then exit",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def print_templates() -> None:
    """Print the template catalog as a Rich table."""
    table = Table(title="Templates", show_header=True, header_style="bold cyan")
    table.add_column("Name", no_wrap=True)
    table.add_column("Description")
    table.add_column("Options")
    for template in TEMPLATES:
        options = ", ".join(
            f"{name}*" if name in template.recommended else name
            for name in template.option_names
        )
        table.add_row(f"[{template.color}]{template.name}[/{template.color}]", template.hint, options)
    console.print(table)
    console.print("[dim]* recommended[/dim]")


def _resolve_project_name(args: argparse.Namespace) -> tuple[str, str]:
    """Return ``(project name, target directory)`` from the parsed arguments."""
    directory = args.directory or f"./{DEFAULT_PACKAGE_NAME}"
    name = args.name or project_name_from_path(directory)
    if not is_valid_package_name(name):
        if args.name:
            raise ScaffoldError(f'"{name}" is not a valid package name.')
        print_warning(f'"{name}" is not a valid package name -- using "{DEFAULT_PACKAGE_NAME}".')
        name = DEFAULT_PACKAGE_NAME
    return name, directory


def _print_result(result: ScaffoldResult) -> None:
    summary = {
        "Project": str(result.project_root),
        "Template": result.template,
        "Options": ", ".join(result.options) or "-",
    }
    for section in SECTIONS:
        count = len(result.dependencies.section(section))
        if count:
            summary[section.value] = str(count)
    print_summary_table(summary, title="Project created")


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point for ``create-project`` and ``python -m create_project``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_templates:
        print_templates()
        return 0

    config = Config.from_env()
    if args.strict_versions:
        config.strict_versions = True

    try:
        project_name, directory = _resolve_project_name(args)
        options = list(args.options)
        if args.recommended:
            options = [*get_template(args.template).recommended, *options]
        request = ScaffoldRequest(
            project_name=project_name,
            target_dir=directory,
            template=args.template,
            options=options,
            overwrite=args.overwrite,
        )
        print_header(f"create-project v{__version__}")
        result = asyncio.run(ProjectGenerator(config).generate(request))
    except (ScaffoldError, ValidationError) as exc:
        print_error(f"Error: {exc}")
        return 1

    _print_result(result)
    print_success("You're all set!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
