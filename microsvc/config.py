"""Generator configuration.

Two layers, both Pydantic v2 models:

* ``UserDefaults`` -- the user's preferred framework / AWS target / pipeline,
  read from ``~/.microservicegeneratorrc.json``.  The file is optional and
  never blocks a run: anything missing or invalid falls back silently.
* ``Settings`` -- process-level inputs (home directory, AWS region).  This is
  the only place the process environment is read; everything downstream
  receives plain values.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from microsvc.choices import AWS_TARGETS, CICD_PIPELINES, FRAMEWORKS

DEFAULT_CONFIG_FILENAME = ".microservicegeneratorrc.json"
DEFAULT_AWS_REGION = "us-east-1"
CUSTOM_TEMPLATES_DIRNAME = ".microservice-generator"


class UserDefaults(BaseModel):
    """Normalised defaults used to pre-fill the interactive prompts."""

    model_config = ConfigDict(populate_by_name=True)

    default_framework: str = Field(default=FRAMEWORKS.default, alias="defaultFramework")
    default_aws: str = Field(default=AWS_TARGETS.default, alias="defaultAWS")
    default_cicd: str = Field(default=CICD_PIPELINES.default, alias="defaultCICD")

    @classmethod
    def from_raw(cls, raw: Any) -> "UserDefaults":
        """Keep only the keys whose value belongs to its choice set."""
        if not isinstance(raw, dict):
            return cls()

        kwargs: dict[str, str] = {}
        if FRAMEWORKS.is_valid(raw.get("defaultFramework")):
            kwargs["default_framework"] = raw["defaultFramework"]
        if AWS_TARGETS.is_valid(raw.get("defaultAWS")):
            kwargs["default_aws"] = raw["defaultAWS"]
        if CICD_PIPELINES.is_valid(raw.get("defaultCICD")):
            kwargs["default_cicd"] = raw["defaultCICD"]
        return cls(**kwargs)


def load_user_defaults(
    path: str | Path | None = None,
    home: Path | None = None,
) -> UserDefaults:
    """Load the user's defaults file.

    Args:
        path: Explicit file (``--config``), resolved against the current
            directory.  Defaults to ``~/.microservicegeneratorrc.json``.
        home: Home directory override, mainly for tests.

    Returns:
        Normalised defaults.  A missing, unreadable or malformed file yields
        the fallbacks (first entry of each choice set).
    """
    if path is not None:
        resolved = Path(path).expanduser().resolve()
    else:
        settings = Settings(home_dir=home) if home is not None else Settings()
        resolved = settings.defaults_path

    try:
        raw = json.loads(resolved.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return UserDefaults()
    return UserDefaults.from_raw(raw)


class Settings(BaseModel):
    """Process-level inputs for a generation run."""

    home_dir: Path = Field(default_factory=Path.home)
    aws_region: str = Field(default=DEFAULT_AWS_REGION, min_length=1)

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def defaults_path(self) -> Path:
        """Location of the user defaults file."""
        return self.home_dir / DEFAULT_CONFIG_FILENAME

    @property
    def custom_templates_root(self) -> Path:
        """Root of the per-framework custom template overlays."""
        return self.home_dir / CUSTOM_TEMPLATES_DIRNAME / "templates"

    def custom_template_dir(self, framework: str) -> Path:
        """Overlay directory copied over a generated *framework* project."""
        return self.custom_templates_root / framework

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from the environment.

        Recognised variables: ``AWS_REGION`` (an empty value means the
        default region).
        """
        region = os.environ.get("AWS_REGION") or DEFAULT_AWS_REGION
        return cls(home_dir=Path.home(), aws_region=region)
