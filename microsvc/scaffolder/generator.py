"""Main scaffolding orchestrator.

Takes ``GenerationOptions`` and produces a ready-to-run Node.js microservice
skeleton: package manifest, HTTP server, health-check test, Docker files,
deployment scripts, infrastructure templates and a CI/CD pipeline.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel
from rich.console import Console

from microsvc.config import Settings
from microsvc.utils import print_info

from .assembler import Artifact, ArtifactAssembler
from .context import GenerationOptions, ProjectContext, build_context
from .templates import TemplateRenderer
from .writer import apply_custom_templates, ensure_target_available, write_artifacts


class GenerationResult(BaseModel):
    """Outcome of a successful ``ProjectGenerator.generate`` run."""

    project_dir: Path
    files: list[Path]
    custom_template_applied: bool = False


class ProjectGenerator:
    """Main scaffolding orchestrator.

    The context and artifact list are computed up front and never touch the
    filesystem; ``generate`` then runs, in order:

    1. Pre-flight check on the project directory
    2. Concurrent write of every artifact
    3. Custom template overlay from ``~/.microservice-generator/templates/<framework>``
    """

    def __init__(
        self,
        options: GenerationOptions,
        settings: Settings | None = None,
        console: Console | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.options = options
        self.settings = settings or Settings()
        self.console = console
        self.assembler = ArtifactAssembler(renderer)
        self.context: ProjectContext = build_context(options, aws_region=self.settings.aws_region)

    # -- Public API --------------------------------------------------------

    def plan(self) -> list[Artifact]:
        """Return the artifacts ``generate`` would write, without any I/O."""
        return self.assembler.assemble(self.context)

    async def generate(self) -> GenerationResult:
        """Generate the project on disk.

        Returns:
            The project directory and the files written to it.

        Raises:
            TargetNotEmptyError: If the project directory is already in use;
                nothing is written in that case.
            FileSystemError: If a write or the overlay copy fails.
        """
        artifacts = self.plan()
        project_dir = self.context.project_dir

        ensure_target_available(project_dir)
        self._report(f"Project directory ready: {project_dir}")

        files = await write_artifacts(project_dir, artifacts)
        self._report(f"Wrote {len(files)} files")

        overlay = self.settings.custom_template_dir(self.context.framework)
        applied = await apply_custom_templates(project_dir, overlay)
        if applied:
            self._report(f"Applied custom templates from {overlay}")

        return GenerationResult(
            project_dir=project_dir,
            files=files,
            custom_template_applied=applied,
        )

    # -- Helpers -----------------------------------------------------------

    def _report(self, message: str) -> None:
        if self.console is not None:
            print_info(message, self.console)
