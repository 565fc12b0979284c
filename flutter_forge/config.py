"""FlutterForge configuration.

Typed settings for the command-line front-end.  Every setting uses a Pydantic
v2 model so it is validated at construction time and can be serialised to or
from JSON and read from environment variables without boiler-plate.
"""

from __future__ import annotations

import os
import posixpath
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from .scaffolder.project_template import DEFAULT_ORG, ArchitecturePattern, StateManagement

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _env_bool(name: str) -> bool | None:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return None
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


class ForgeConfig(BaseModel):
    """Global FlutterForge configuration.

    Holds the defaults for project creation and the project-relative
    directories that code generation writes into.  The CLI builds one from
    the environment and then overrides fields with explicit flags.
    """

    output_dir: Path = Field(default=Path("."))
    org_identifier: str = Field(default=DEFAULT_ORG)
    architecture: ArchitecturePattern = Field(default=ArchitecturePattern.CLEAN)
    state_management: StateManagement = Field(default=StateManagement.RIVERPOD)
    features_dir: str = Field(default="lib/src/features")
    core_dir: str = Field(default="lib/src/core")
    tests_dir: str = Field(default="test/features")
    include_tests: bool = Field(default=True)
    include_ci: bool = Field(default=True)
    use_freezed: bool = Field(default=True, description="Generate models with freezed")

    @field_validator("features_dir", "core_dir", "tests_dir")
    @classmethod
    def _relative_dir(cls, value: str) -> str:
        clean = posixpath.normpath(value.replace("\\", "/").strip())
        if clean.startswith("/") or clean == ".." or clean.startswith("../"):
            raise ValueError("directories must be relative to the project root")
        return clean

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    def feature_path(self, name: str) -> str:
        """Project-relative directory of feature *name*."""
        return posixpath.join(self.features_dir, name)

    def feature_tests_path(self, name: str) -> str:
        """Project-relative directory of the tests for feature *name*."""
        return posixpath.join(self.tests_dir, name)

    def core_path(self, sub: str = "") -> str:
        """Project-relative path inside the core directory."""
        return posixpath.join(self.core_dir, sub) if sub else self.core_dir

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "ForgeConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "ForgeConfig":
        """Build a ``ForgeConfig`` from environment variables.

        Recognised variables (all optional):
            FORGE_OUTPUT_DIR, FORGE_ORG, FORGE_ARCHITECTURE, FORGE_STATE,
            FORGE_INCLUDE_TESTS, FORGE_INCLUDE_CI, FORGE_USE_FREEZED.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("FORGE_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["FORGE_OUTPUT_DIR"])
        if os.environ.get("FORGE_ORG"):
            kwargs["org_identifier"] = os.environ["FORGE_ORG"]
        if os.environ.get("FORGE_ARCHITECTURE"):
            kwargs["architecture"] = os.environ["FORGE_ARCHITECTURE"].strip().lower()
        if os.environ.get("FORGE_STATE"):
            kwargs["state_management"] = os.environ["FORGE_STATE"].strip().lower()

        for env_name, key in (
            ("FORGE_INCLUDE_TESTS", "include_tests"),
            ("FORGE_INCLUDE_CI", "include_ci"),
            ("FORGE_USE_FREEZED", "use_freezed"),
        ):
            value = _env_bool(env_name)
            if value is not None:
                kwargs[key] = value

        return cls(**kwargs)
