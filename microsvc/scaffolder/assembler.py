"""Artifact assembly: the complete, ordered file list for one project.

``ArtifactAssembler.assemble`` is deterministic and side-effect free.  Given
the same ``ProjectContext`` it returns artifacts with identical paths, modes
and content, which the writer then materialises on disk.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict

from microsvc.choices import AWS_TARGETS
from microsvc.errors import DuplicateArtifactError, UnknownRecipeError

from .context import ProjectContext
from .docker_gen import DockerGenerator
from .manifest import build_package_manifest
from .recipes import FileRecipe, ResolvedRecipes, resolve_recipes
from .templates import TemplateRenderer

EXECUTABLE = 0o755

BASE_ENV_LINES: tuple[str, ...] = (
    "NODE_ENV=development",
    "PORT={{ port }}",
    "LOG_LEVEL=info",
)

_PROJECT_FILES: tuple[FileRecipe, ...] = (
    FileRecipe(path="jest.config.js", template="jest.config.js.j2"),
    FileRecipe(path="prettier.config.mjs", template="prettier.config.mjs.j2"),
    FileRecipe(path="eslint.config.mjs", template="eslint.config.mjs.j2"),
    FileRecipe(path="src/index.js", template="src/index.js.j2"),
    FileRecipe(path="src/config/env.js", template="src/config/env.js.j2"),
    FileRecipe(path="src/utils/logger.js", template="src/utils/logger.js.j2"),
)

# One infrastructure definition per AWS target, all of them always emitted.
INFRASTRUCTURE_FILES: dict[str, FileRecipe] = {
    "ecs": FileRecipe(path="aws/ecs/task-definition.json", template="aws/ecs/task-definition.json.j2"),
    "lambda": FileRecipe(path="aws/lambda/template.yaml", template="aws/lambda/template.yaml.j2"),
    "ec2": FileRecipe(path="aws/ec2/user-data.sh", template="aws/ec2/user-data.sh.j2"),
}

PIPELINE_FILES: dict[str, FileRecipe] = {
    "github": FileRecipe(path=".github/workflows/deploy.yml", template="ci/github-deploy.yml.j2"),
    "gitlab": FileRecipe(path=".gitlab-ci.yml", template="ci/gitlab-ci.yml.j2"),
}


class Artifact(BaseModel):
    """One file of the generated project.

    ``content`` is either text or a JSON object; ``path`` is relative to the
    project directory and always uses forward slashes.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    content: str | dict[str, Any]
    mode: int | None = None

    def render(self) -> str:
        """Text written to disk (JSON objects get 2-space indent and a newline)."""
        if isinstance(self.content, dict):
            return json.dumps(self.content, indent=2, ensure_ascii=False) + "\n"
        return self.content


class ArtifactAssembler:
    """Builds the ordered artifact list for a ``ProjectContext``."""

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()
        self.docker_gen = DockerGenerator(self.renderer)

    # -- Public API --------------------------------------------------------

    def assemble(self, context: ProjectContext) -> list[Artifact]:
        """Return every artifact for *context*, in a fixed order.

        Raises:
            UnknownRecipeError: If a selection has no recipe.
            DependencyConflictError: If recipes disagree on a package range.
            DuplicateArtifactError: If two recipes emit the same path.
        """
        recipes = resolve_recipes(context)
        variables = context.template_vars()

        artifacts: list[Artifact] = [
            Artifact(path="package.json", content=build_package_manifest(context, recipes)),
            self._render(FileRecipe(path=".gitignore", template="gitignore.j2"), variables),
            Artifact(path=".dockerignore", content=self.docker_gen.dockerignore(context)),
            Artifact(path=".env.example", content=self.env_example(context, recipes)),
            Artifact(path="Dockerfile", content=self.docker_gen.dockerfile(context)),
            Artifact(path="docker-compose.yml", content=self.docker_gen.compose(context, recipes)),
            Artifact(path="README.md", content=self.readme(context, recipes)),
        ]
        artifacts.extend(self._render(recipe, variables) for recipe in _PROJECT_FILES)

        framework = recipes.framework
        artifacts.append(
            self._render(FileRecipe(path="src/server.js", template=framework.server_template), variables)
        )
        artifacts.append(
            self._render(FileRecipe(path="tests/health.test.js", template=framework.test_template), variables)
        )
        artifacts.append(
            self._render(
                FileRecipe(path=".husky/pre-commit", template="husky/pre-commit.j2", mode=EXECUTABLE),
                variables,
            )
        )

        artifacts.extend(self._deploy_scripts(variables))
        artifacts.extend(self._infrastructure(context, variables))

        pipeline = PIPELINE_FILES.get(context.ci_cd)
        if pipeline is not None:
            artifacts.append(self._render(pipeline, variables))

        for addon in recipes.addons:
            artifacts.extend(self._render(recipe, variables) for recipe in addon.files)

        _check_unique_paths(artifacts)
        return artifacts

    # -- Cross-cutting documents -------------------------------------------

    def env_example(self, context: ProjectContext, recipes: ResolvedRecipes) -> str:
        """Base ``.env`` lines followed by each add-on's lines, in selection order."""
        variables = context.template_vars()
        lines = [self.renderer.render_string(line, variables) for line in BASE_ENV_LINES]
        for addon in recipes.addons:
            lines.extend(self.renderer.render_string(line, variables) for line in addon.env_lines)
        return "\n".join(lines) + "\n"

    def readme(self, context: ProjectContext, recipes: ResolvedRecipes) -> str:
        variables = context.template_vars()
        sections = [
            self.renderer.render(addon.readme_template, variables).strip("\n")
            for addon in recipes.addons
            if addon.readme_template is not None
        ]
        scripts = [script for addon in recipes.addons for script in addon.scripts]
        return self.renderer.render(
            "README.md.j2",
            {**variables, "addon_sections": sections, "addon_scripts": scripts},
        )

    # -- Helpers -----------------------------------------------------------

    def _render(self, recipe: FileRecipe, variables: dict[str, Any]) -> Artifact:
        return Artifact(
            path=recipe.path,
            content=self.renderer.render(recipe.template, variables),
            mode=recipe.mode,
        )

    def _deploy_scripts(self, variables: dict[str, Any]) -> list[Artifact]:
        return [
            Artifact(
                path=f"scripts/deploy-{target}.sh",
                content=self.renderer.render(
                    "scripts/deploy.sh.j2", {**variables, "deploy_target": target}
                ),
                mode=EXECUTABLE,
            )
            for target in AWS_TARGETS.values()
        ]

    def _infrastructure(self, context: ProjectContext, variables: dict[str, Any]) -> list[Artifact]:
        """Infrastructure files for every target, the selected one first."""
        targets = [context.aws_target] + [
            t for t in AWS_TARGETS.values() if t != context.aws_target
        ]
        artifacts: list[Artifact] = []
        for target in targets:
            recipe = INFRASTRUCTURE_FILES.get(target)
            if recipe is None:
                raise UnknownRecipeError("infrastructure", target)
            artifacts.append(self._render(recipe, variables))
        return artifacts


def _check_unique_paths(artifacts: list[Artifact]) -> None:
    seen: set[str] = set()
    for artifact in artifacts:
        if artifact.path in seen:
            raise DuplicateArtifactError(artifact.path)
        seen.add(artifact.path)
