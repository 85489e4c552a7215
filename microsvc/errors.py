"""Exception hierarchy for the microservice scaffolder.

Every error raised on purpose by the generator derives from ``ScaffoldError``
so the CLI can report it with a single ``except`` clause and a non-zero exit.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class ScaffoldError(Exception):
    """Base class for all generator failures."""


class InvalidChoiceError(ScaffoldError):
    """Raised when a value is not part of its choice set."""

    def __init__(self, label: str, value: str, allowed: Sequence[str]) -> None:
        self.label = label
        self.value = value
        self.allowed = list(allowed)
        super().__init__(
            f'Invalid {label} "{value}". Allowed values: {", ".join(self.allowed)}.'
        )


class InvalidServiceNameError(ScaffoldError):
    """Raised for an empty service name or one outside ``[a-z0-9-]``."""

    def __init__(self, name: str) -> None:
        self.name = name
        if not name.strip():
            message = "Service name cannot be empty."
        else:
            message = (
                f'Invalid service name "{name}". '
                "Use lowercase letters, numbers, and hyphens only."
            )
        super().__init__(message)


class TargetNotEmptyError(ScaffoldError):
    """Raised by the pre-flight check when the project directory is in use."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(
            f'Target directory "{self.path}" is not empty. '
            "Choose a different service name or clean the directory."
        )


class DependencyConflictError(ScaffoldError):
    """Raised when two recipes pin the same package to different ranges."""

    def __init__(
        self,
        package: str,
        existing: str,
        incoming: str,
        sources: tuple[str, str],
    ) -> None:
        self.package = package
        self.existing = existing
        self.incoming = incoming
        self.sources = sources
        super().__init__(
            f'Dependency conflict for "{package}": {sources[0]} requires {existing}, '
            f"{sources[1]} requires {incoming}."
        )


class RecipeError(ScaffoldError):
    """Programming fault in the recipe tables (not recoverable by the user)."""


class UnknownRecipeError(RecipeError):
    """Raised when a valid choice value has no registered recipe."""

    def __init__(self, kind: str, value: str) -> None:
        self.kind = kind
        self.value = value
        super().__init__(f'No {kind} recipe registered for "{value}".')


class DuplicateArtifactError(RecipeError):
    """Raised when two recipes emit a file at the same path."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f'More than one generated file targets "{path}".')


class FileSystemError(ScaffoldError):
    """Wraps an ``OSError`` raised while emitting the project."""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = Path(path)
        self.cause = cause
        reason = cause.strerror or str(cause)
        super().__init__(f'Failed to write "{self.path}": {reason}')
