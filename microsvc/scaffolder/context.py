"""Project context construction.

Turns the user's ``GenerationOptions`` into a fully resolved, immutable
``ProjectContext``.  The context is a pure function of the options and the
AWS region passed in by the caller; nothing here reads the environment.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from microsvc.choices import (
    ADDONS,
    AWS_TARGETS,
    CICD_PIPELINES,
    FRAMEWORKS,
    validate_service_name,
)
from microsvc.config import DEFAULT_AWS_REGION

DEFAULT_PORT = 3000


class GenerationOptions(BaseModel):
    """The finalised selections handed to the generator."""

    service_name: str = Field(..., description="Service name, [a-z0-9-]+")
    framework: str = Field(default=FRAMEWORKS.default)
    aws_target: str = Field(default=AWS_TARGETS.default)
    ci_cd: str = Field(default=CICD_PIPELINES.default)
    addons: list[str] = Field(default_factory=list, description="Add-on values, in selection order")
    target_dir: Path = Field(default_factory=Path.cwd, description="Parent of the project directory")

    @field_validator("addons")
    @classmethod
    def _dedupe_addons(cls, value: list[str]) -> list[str]:
        return list(dict.fromkeys(value))

    @field_validator("target_dir")
    @classmethod
    def _absolute_target(cls, value: Path) -> Path:
        return value.expanduser().resolve()


class ProjectContext(BaseModel):
    """Resolved, denormalised view of the options used by every recipe."""

    model_config = ConfigDict(frozen=True)

    service_name: str
    display_name: str
    framework: str
    framework_label: str
    aws_target: str
    aws_label: str
    ci_cd: str
    ci_cd_label: str
    addons: tuple[str, ...]
    addon_labels: tuple[str, ...]
    target_dir: Path
    project_dir: Path
    port: int = DEFAULT_PORT
    docker_image: str
    database_name: str
    aws_region: str

    def template_vars(self) -> dict[str, Any]:
        """Flat mapping handed to Jinja2 templates."""
        return {
            **self.model_dump(),
            "aws_targets": AWS_TARGETS.values(),
        }


def build_context(
    options: GenerationOptions,
    aws_region: str | None = None,
) -> ProjectContext:
    """Resolve *options* into a ``ProjectContext``.

    Args:
        options: Validated user selections.
        aws_region: Region injected by the caller (usually from
            ``Settings``).  ``None`` or empty means ``us-east-1``.

    Raises:
        InvalidServiceNameError: If the service name would produce a
            malformed project path.
        InvalidChoiceError: If any selection is outside its choice set.
    """
    service_name = validate_service_name(options.service_name)
    addons = tuple(dict.fromkeys(options.addons))

    return ProjectContext(
        service_name=service_name,
        display_name=to_display_name(service_name),
        framework=options.framework,
        framework_label=FRAMEWORKS.label_for(options.framework),
        aws_target=options.aws_target,
        aws_label=AWS_TARGETS.label_for(options.aws_target),
        ci_cd=options.ci_cd,
        ci_cd_label=CICD_PIPELINES.label_for(options.ci_cd),
        addons=addons,
        addon_labels=tuple(ADDONS.label_for(addon) for addon in addons),
        target_dir=options.target_dir,
        project_dir=options.target_dir / service_name,
        docker_image=to_docker_image(service_name),
        database_name=to_database_name(service_name),
        aws_region=aws_region or DEFAULT_AWS_REGION,
    )


# ---------------------------------------------------------------------------
# Name derivation helpers
# ---------------------------------------------------------------------------

def to_display_name(service_name: str) -> str:
    """``orders-service`` -> ``Orders Service``.

    Empty segments (doubled or trailing hyphens) are dropped.
    """
    return " ".join(
        segment[0].upper() + segment[1:]
        for segment in service_name.split("-")
        if segment
    )


def to_docker_image(service_name: str) -> str:
    """``orders-service!`` -> ``ordersservice``."""
    return re.sub(r"[^a-zA-Z0-9]", "", service_name).lower()


def to_database_name(service_name: str) -> str:
    """Strip non-alphanumerics; used for Postgres/Mongo database names."""
    return re.sub(r"[^a-zA-Z0-9]", "", service_name)
