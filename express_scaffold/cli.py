"""Command-line entry point.

Usage::

    express-scaffold                 # prompts for the project name
    express-scaffold shop-api -o ~/code
    python -m express_scaffold shop-api --port 4000
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.prompt import Prompt

from express_scaffold import __version__
from express_scaffold.config import ScaffoldConfig
from express_scaffold.scaffolder import ProjectGenerator, print_project_summary
from express_scaffold.scaffolder.runner import ToolRunner
from express_scaffold.utils import console, print_error


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="express-scaffold",
        description="Generate an Express.js + MongoDB backend with user authentication",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  express-scaffold\n"
            "  express-scaffold shop-api\n"
            "  express-scaffold shop-api -o ./projects --port 4000\n"
        ),
    )
    parser.add_argument(
        "name",
        nargs="?",
        default=None,
        help="Project name (prompted for when omitted)",
    )
    parser.add_argument(
        "--output-dir", "-o",
        default=None,
        help="Directory in which the project folder is created (default: current directory)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="JSON file with saved scaffold settings",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="PORT written to the generated .env (default: 3000)",
    )
    parser.add_argument(
        "--package-manager",
        default=None,
        help="Executable used for init/install (default: npm)",
    )
    parser.add_argument(
        "--cleanup-on-failure",
        action="store_true",
        help="Remove the project directory again if a step fails",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def load_config(args: argparse.Namespace) -> ScaffoldConfig:
    """Merge ``--config`` with the command-line overrides."""
    config = ScaffoldConfig.load(Path(args.config)) if args.config else ScaffoldConfig()
    overrides: dict[str, object] = {}
    if args.output_dir:
        overrides["output_dir"] = Path(args.output_dir)
    if args.port is not None:
        overrides["port"] = args.port
    if args.package_manager:
        overrides["package_manager"] = args.package_manager
    if args.cleanup_on_failure:
        overrides["cleanup_on_failure"] = True
    if not overrides:
        return config
    return ScaffoldConfig.model_validate({**config.model_dump(), **overrides})


async def run(name: str | None, config: ScaffoldConfig, runner: ToolRunner | None = None) -> None:
    """Prompt for the name if needed, generate the project and print the summary."""
    console.print("[bold cyan]🚀 Express.js project generator (CRUD architecture)[/bold cyan]")
    if name is None:
        name = Prompt.ask("Project name", console=console)
    generator = ProjectGenerator(config, runner=runner)
    result = await generator.generate(name)
    print_project_summary(result)


def main(argv: list[str] | None = None, runner: ToolRunner | None = None) -> None:
    """CLI entry point for ``express-scaffold`` / ``python -m express_scaffold``.

    Exits with status 1 on any failure, printing the message to stderr.
    """
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args)
    except (OSError, ValidationError) as exc:
        print_error(f"Error: invalid configuration: {exc}")
        sys.exit(1)

    try:
        asyncio.run(run(args.name, config, runner))
    except KeyboardInterrupt:
        print_error("Error: interrupted")
        sys.exit(1)
    except Exception as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
