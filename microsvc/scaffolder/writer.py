"""Writing an assembled project to disk.

The pre-flight check must pass before anything is written.  Individual file
writes then run concurrently in worker threads; each one creates its own
parent directories first.  The custom template overlay runs strictly after
every generated file is on disk.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path
from typing import Sequence

from microsvc.errors import FileSystemError, TargetNotEmptyError

from .assembler import Artifact


def ensure_target_available(project_dir: Path) -> None:
    """Create *project_dir* unless it already holds something.

    Raises:
        TargetNotEmptyError: If the path is a non-empty directory or an
            existing non-directory.
        FileSystemError: If the directory cannot be created or listed.
    """
    try:
        if project_dir.exists():
            if not project_dir.is_dir() or any(project_dir.iterdir()):
                raise TargetNotEmptyError(project_dir)
            return
        project_dir.mkdir(parents=True)
    except OSError as exc:
        raise FileSystemError(project_dir, exc) from exc


async def write_artifacts(project_dir: Path, artifacts: Sequence[Artifact]) -> list[Path]:
    """Write every artifact under *project_dir*.

    Args:
        project_dir: Existing, pre-flight-checked project root.
        artifacts: Files to write; paths are relative to *project_dir*.

    Returns:
        Absolute paths of the written files, in artifact order.

    Raises:
        FileSystemError: For the first write that fails.
    """
    return list(
        await asyncio.gather(
            *(asyncio.to_thread(_write_artifact, project_dir, artifact) for artifact in artifacts)
        )
    )


async def apply_custom_templates(project_dir: Path, template_dir: Path) -> bool:
    """Copy *template_dir* over the generated project, overwriting files.

    Returns:
        ``True`` if the overlay directory existed and was copied.
    """
    if not template_dir.is_dir():
        return False
    try:
        await asyncio.to_thread(
            shutil.copytree, template_dir, project_dir, dirs_exist_ok=True
        )
    except OSError as exc:
        raise FileSystemError(project_dir, exc) from exc
    return True


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _write_artifact(project_dir: Path, artifact: Artifact) -> Path:
    """Synchronous helper: create parent dirs, write content, apply mode."""
    path = project_dir / artifact.path
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(artifact.render(), encoding="utf-8")
        if artifact.mode is not None:
            path.chmod(artifact.mode)
    except OSError as exc:
        raise FileSystemError(path, exc) from exc
    return path
