"""Shared pytest fixtures for the microsvc test suite.

Provides reusable fixtures for:
- Temporary workspaces and a fake home directory
- Generation options for the common scenarios
- A real template renderer and artifact assembler
- A recording Rich console
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Callable

import pytest
from rich.console import Console

from microsvc.config import Settings
from microsvc.scaffolder.assembler import Artifact, ArtifactAssembler
from microsvc.scaffolder.context import GenerationOptions
from microsvc.scaffolder.templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Empty parent directory for generated projects."""
    path = tmp_path / "workspace"
    path.mkdir()
    return path


@pytest.fixture
def fake_home(tmp_path: Path) -> Path:
    """Home directory with no defaults file and no custom templates."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def settings(fake_home: Path) -> Settings:
    return Settings(home_dir=fake_home, aws_region="us-east-1")


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

@pytest.fixture
def express_options(workspace: Path) -> GenerationOptions:
    """express + ecs + github + postgres."""
    return GenerationOptions(
        service_name="orders-service",
        framework="express",
        aws_target="ecs",
        ci_cd="github",
        addons=["postgres"],
        target_dir=workspace,
    )


@pytest.fixture
def bare_options(workspace: Path) -> GenerationOptions:
    """Same as ``express_options`` without any add-on."""
    return GenerationOptions(
        service_name="orders-service",
        framework="express",
        aws_target="ecs",
        ci_cd="github",
        addons=[],
        target_dir=workspace,
    )


@pytest.fixture
def full_options(workspace: Path) -> GenerationOptions:
    """fastify + lambda + gitlab with every add-on."""
    return GenerationOptions(
        service_name="billing-api",
        framework="fastify",
        aws_target="lambda",
        ci_cd="gitlab",
        addons=["postgres", "mongo", "redis", "sqs"],
        target_dir=workspace,
    )


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture
def assembler(renderer: TemplateRenderer) -> ArtifactAssembler:
    return ArtifactAssembler(renderer)


@pytest.fixture
def by_path() -> Callable[[list[Artifact]], dict[str, Artifact]]:
    """Index an artifact list by relative path."""

    def _index(artifacts: list[Artifact]) -> dict[str, Artifact]:
        return {artifact.path: artifact for artifact in artifacts}

    return _index


# ---------------------------------------------------------------------------
# Console
# ---------------------------------------------------------------------------

@pytest.fixture
def quiet_console() -> Console:
    """Console writing to an in-memory buffer; read it with ``.file.getvalue()``."""
    return Console(file=io.StringIO(), width=120, color_system=None)
