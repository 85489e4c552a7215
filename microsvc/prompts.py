"""Interactive collection of the generator options.

Only values the user did not pass on the command line are asked for.  The
framework / AWS target / pipeline prompts are pre-filled from the user's
defaults file.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field
from rich.console import Console
from rich.prompt import Confirm, Prompt

from microsvc.choices import (
    ADDONS,
    AWS_TARGETS,
    CICD_PIPELINES,
    FRAMEWORKS,
    ChoiceSet,
    parse_addons,
    validate_service_name,
)
from microsvc.config import UserDefaults
from microsvc.errors import InvalidChoiceError, InvalidServiceNameError
from microsvc.scaffolder.context import GenerationOptions
from microsvc.utils import console as default_console
from microsvc.utils import print_error, print_summary_table


class Selections(BaseModel):
    """Values already supplied (and validated) on the command line."""

    name: str | None = None
    framework: str | None = None
    aws_target: str | None = None
    ci_cd: str | None = None
    addons: list[str] | None = None
    target_dir: Path = Field(default_factory=Path.cwd)


def ask_service_name(console: Console) -> str:
    """Ask until a valid service name is entered."""
    while True:
        raw = Prompt.ask("Enter microservice name", console=console)
        try:
            return validate_service_name(raw)
        except InvalidServiceNameError as exc:
            print_error(str(exc), console)


def ask_choice(message: str, choices: ChoiceSet, default: str, console: Console) -> str:
    for choice in choices.choices:
        console.print(f"  [cyan]{choice.value}[/cyan] - {choice.name}")
    return Prompt.ask(message, choices=choices.values(), default=default, console=console)


def ask_addons(console: Console) -> list[str]:
    """Ask for a comma-separated add-on list; blank means none."""
    for choice in ADDONS.choices:
        console.print(f"  [cyan]{choice.value}[/cyan] - {choice.name}")
    while True:
        raw = Prompt.ask(
            "Select optional add-ons (comma separated, blank for none)",
            default="",
            show_default=False,
            console=console,
        )
        try:
            return parse_addons(raw)
        except InvalidChoiceError as exc:
            print_error(str(exc), console)


def complete_selections(
    selections: Selections,
    defaults: UserDefaults,
    *,
    interactive: bool = True,
    console: Console | None = None,
) -> GenerationOptions:
    """Fill in every missing selection and return the final options.

    Args:
        selections: Values from the command line.
        defaults: User defaults for the choice prompts.
        interactive: When ``False`` nothing is asked; missing choices take
            the defaults and add-ons default to none.
        console: Console used for prompts.

    Raises:
        InvalidServiceNameError: If not interactive and no name was given.
    """
    out = console or default_console

    if selections.name is not None:
        name = selections.name
    elif interactive:
        name = ask_service_name(out)
    else:
        raise InvalidServiceNameError("")

    def pick(current: str | None, message: str, choices: ChoiceSet, default: str) -> str:
        if current is not None:
            return current
        if interactive:
            return ask_choice(message, choices, default, out)
        return default

    framework = pick(selections.framework, "Choose framework", FRAMEWORKS, defaults.default_framework)
    aws_target = pick(selections.aws_target, "Choose AWS target", AWS_TARGETS, defaults.default_aws)
    ci_cd = pick(selections.ci_cd, "Choose CI/CD pipeline", CICD_PIPELINES, defaults.default_cicd)

    if selections.addons is not None:
        addons = selections.addons
    elif interactive:
        addons = ask_addons(out)
    else:
        addons = []

    return GenerationOptions(
        service_name=name,
        framework=framework,
        aws_target=aws_target,
        ci_cd=ci_cd,
        addons=addons,
        target_dir=selections.target_dir,
    )


def summary_rows(options: GenerationOptions) -> list[tuple[str, str]]:
    return [
        ("Service name", options.service_name),
        ("Framework", options.framework),
        ("AWS target", options.aws_target),
        ("CI/CD", options.ci_cd),
        ("Add-ons", ", ".join(options.addons) if options.addons else "none"),
        ("Output directory", str(options.target_dir / options.service_name)),
    ]


def confirm_summary(options: GenerationOptions, console: Console | None = None) -> bool:
    """Show the selections and ask for confirmation."""
    out = console or default_console
    print_summary_table(summary_rows(options), out=out)
    return Confirm.ask("Generate microservice with these settings?", default=True, console=out)
