"""Command-line entry point.

Usage::

    microsvc-template --name orders-service --framework express --aws ecs
    microsvc-template --name billing --addons postgres,sqs --cicd gitlab --yes
    python -m microsvc --help
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Sequence

from microsvc import __version__
from microsvc.choices import (
    ADDONS,
    AWS_TARGETS,
    CICD_PIPELINES,
    FRAMEWORKS,
    parse_addons,
    validate_service_name,
)
from microsvc.config import Settings, load_user_defaults
from microsvc.errors import ScaffoldError
from microsvc.prompts import Selections, complete_selections, confirm_summary
from microsvc.scaffolder import ProjectGenerator
from microsvc.utils import console, print_error, print_next_steps, print_warning


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="microsvc-template",
        description="Scaffold a Node.js microservice with Docker, AWS deployment and CI/CD",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  microsvc-template\n"
            "  microsvc-template --name orders-service --framework fastify --aws lambda\n"
            "  microsvc-template --name billing --addons postgres,sqs --yes\n"
        ),
    )
    parser.add_argument("--name", help="Service name (kebab-case recommended)")
    parser.add_argument(
        "--framework",
        help=f"Framework ({', '.join(FRAMEWORKS.values())})",
    )
    parser.add_argument(
        "--aws",
        help=f"AWS target ({', '.join(AWS_TARGETS.values())})",
    )
    parser.add_argument(
        "--cicd",
        help=f"CI/CD pipeline ({', '.join(CICD_PIPELINES.values())})",
    )
    parser.add_argument(
        "--addons",
        help=f"Comma separated add-ons ({', '.join(ADDONS.values())})",
    )
    parser.add_argument(
        "--target",
        default=None,
        help="Output directory (defaults to current working dir)",
    )
    parser.add_argument("--config", default=None, help="Custom path to defaults file")
    parser.add_argument(
        "--yes",
        action="store_true",
        help="Skip confirmation and use defaults instead of prompting",
    )
    parser.add_argument("--version", action="version", version=__version__)
    return parser


def parse_selections(args: argparse.Namespace) -> Selections:
    """Validate the command-line values.

    Raises:
        InvalidChoiceError: For an unknown framework, target, pipeline or add-on.
        InvalidServiceNameError: For a malformed ``--name``.
    """
    return Selections(
        name=validate_service_name(args.name) if args.name is not None else None,
        framework=FRAMEWORKS.lookup(args.framework) if args.framework else None,
        aws_target=AWS_TARGETS.lookup(args.aws) if args.aws else None,
        ci_cd=CICD_PIPELINES.lookup(args.cicd) if args.cicd else None,
        addons=parse_addons(args.addons) if args.addons is not None else None,
        target_dir=Path(args.target).expanduser().resolve() if args.target else Path.cwd(),
    )


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point for ``microsvc-template``."""
    args = build_parser().parse_args(argv)

    try:
        selections = parse_selections(args)
    except ScaffoldError as exc:
        print_error(str(exc))
        sys.exit(1)

    settings = Settings.from_env()
    defaults = load_user_defaults(args.config, home=settings.home_dir)

    if args.yes and selections.name is None:
        print_error("A service name is required to proceed.")
        sys.exit(1)

    try:
        options = complete_selections(selections, defaults, interactive=not args.yes, console=console)
        confirmed = args.yes or confirm_summary(options, console)
    except (KeyboardInterrupt, EOFError):
        console.print()
        print_warning("Aborting. No files were created.")
        sys.exit(1)

    if not confirmed:
        print_warning("Aborting. No files were created.")
        return

    try:
        generator = ProjectGenerator(options, settings=settings, console=console)
        result = asyncio.run(generator.generate())
    except ScaffoldError as exc:
        print_error("Failed to generate microservice.")
        print_error(str(exc))
        sys.exit(1)

    print_next_steps(result.project_dir)


if __name__ == "__main__":
    main()
