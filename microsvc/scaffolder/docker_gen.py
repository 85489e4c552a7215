"""Docker file generation: Dockerfile, .dockerignore and docker-compose.yml.

The Compose document always has an ``app`` service.  Each selected add-on
that declares a Compose fragment adds its service, a ``depends_on`` entry on
``app`` and its named volumes.
"""

from __future__ import annotations

from .context import ProjectContext
from .recipes import ResolvedRecipes
from .templates import TemplateRenderer


class DockerGenerator:
    """Renders the Docker-related files of the generated service."""

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    def compose(self, context: ProjectContext, recipes: ResolvedRecipes) -> str:
        """Render ``docker-compose.yml``.

        Args:
            context: Resolved project context.
            recipes: Resolved recipes; add-ons are emitted in selection order.

        Returns:
            The Compose document as YAML text.
        """
        variables = context.template_vars()
        services: list[str] = []
        depends_on: list[str] = []
        volumes: list[str] = []

        for addon in recipes.addons:
            if addon.compose_service is None or addon.compose_template is None:
                continue
            fragment = self.renderer.render(addon.compose_template, variables)
            services.append(fragment.rstrip("\n"))
            depends_on.append(addon.compose_service)
            volumes.extend(
                self.renderer.render_string(volume, variables) for volume in addon.volumes
            )

        return self.renderer.render(
            "docker-compose.yml.j2",
            {
                **variables,
                "addon_services": services,
                "depends_on": depends_on,
                "volumes": volumes,
            },
        )

    def dockerfile(self, context: ProjectContext) -> str:
        return self.renderer.render("Dockerfile.j2", context.template_vars())

    def dockerignore(self, context: ProjectContext) -> str:
        return self.renderer.render("dockerignore.j2", context.template_vars())
