"""``package.json`` assembly for the generated service.

Dependencies are merged base -> framework -> add-ons (in selection order).
A package pinned to two different ranges is a ``DependencyConflictError``;
the same range arriving twice is accepted.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from microsvc.choices import AWS_TARGETS
from microsvc.errors import DependencyConflictError

from .context import ProjectContext
from .recipes import BASE_DEPENDENCIES, BASE_DEV_DEPENDENCIES, ResolvedRecipes

MANIFEST_VERSION = "0.1.0"

LINT_STAGED: dict[str, str] = {
    "*.{js,json,yml,yaml,md}": "prettier --write",
    "src/**/*.js": "eslint --fix",
}


def merge_dependencies(
    sources: Iterable[tuple[str, Mapping[str, str] | Iterable[tuple[str, str]]]],
) -> dict[str, str]:
    """Merge ``(source_name, dependencies)`` pairs in order.

    Each ``dependencies`` is a mapping or a sequence of ``(package, range)``
    pairs.

    Returns:
        A new dict; the inputs are never modified.

    Raises:
        DependencyConflictError: If a package appears with two ranges.
    """
    merged: dict[str, str] = {}
    origin: dict[str, str] = {}
    for source, dependencies in sources:
        for package, version in dict(dependencies).items():
            existing = merged.get(package)
            if existing is not None and existing != version:
                raise DependencyConflictError(
                    package, existing, version, (origin[package], source)
                )
            if existing is None:
                merged[package] = version
                origin[package] = source
    return merged


def build_scripts(context: ProjectContext, recipes: ResolvedRecipes) -> dict[str, str]:
    """The npm ``scripts`` block, add-on scripts appended last."""
    scripts = {
        "dev": "cross-env NODE_ENV=development node src/index.js",
        "start": "cross-env NODE_ENV=production node src/index.js",
        "lint": "eslint .",
        "lint:fix": "eslint . --fix",
        "format": "prettier --check .",
        "format:write": "prettier --write .",
        "test": "cross-env NODE_OPTIONS=--experimental-vm-modules jest",
        "test:watch": "cross-env NODE_OPTIONS=--experimental-vm-modules jest --watch",
        "docker:build": f"docker build -t {context.docker_image}:latest .",
        "docker:run": (
            f"docker run --rm -p {context.port}:{context.port} {context.docker_image}:latest"
        ),
    }
    for target in AWS_TARGETS.values():
        scripts[f"deploy:{target}"] = f"./scripts/deploy-{target}.sh"
    scripts["prepare"] = "husky install"

    for addon in recipes.addons:
        for script in addon.scripts:
            scripts[script.name] = script.command
    return scripts


def build_package_manifest(context: ProjectContext, recipes: ResolvedRecipes) -> dict[str, Any]:
    """Build the generated service's ``package.json`` object."""
    framework = recipes.framework
    dependencies = merge_dependencies(
        [
            ("base", BASE_DEPENDENCIES),
            (f"framework:{framework.value}", framework.dependencies),
            *((f"addon:{a.value}", a.dependencies) for a in recipes.addons),
        ]
    )
    dev_dependencies = merge_dependencies(
        [
            ("base", BASE_DEV_DEPENDENCIES),
            (f"framework:{framework.value}", framework.dev_dependencies),
            *((f"addon:{a.value}", a.dev_dependencies) for a in recipes.addons),
        ]
    )

    return {
        "name": context.service_name,
        "version": MANIFEST_VERSION,
        "private": True,
        "type": "module",
        "description": f"{context.display_name} microservice generated by microservice-generator.",
        "scripts": build_scripts(context, recipes),
        "engines": {"node": ">=18.0.0"},
        "dependencies": dependencies,
        "devDependencies": dev_dependencies,
        "lint-staged": dict(LINT_STAGED),
    }
