"""Build configuration loader.

Supports grammarbuild.yaml (or .yml / .json) in the workspace root for
overriding the target list, recipe table and toolchain commands.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from grammarbuild.build.recipes import DEFAULT_RECIPES, recipe_from_dict
from grammarbuild.build.types import Recipe
from grammarbuild.schemas.validator import validate_data

CONFIG_FILENAMES = ("grammarbuild.yaml", "grammarbuild.yml", "grammarbuild.json")
JOBS_ENV = "GRAMMARBUILD_JOBS"


class ConfigError(RuntimeError):
    """Raised when configuration or the package manifest cannot be used."""


@dataclass(frozen=True)
class BuildSettings:
    """Settings for one build run, rooted at a workspace directory."""

    workspace_root: Path
    jobs: int | None = None
    out_dir: str = "out"
    manifest: str = "package.json"
    target_prefix: str = "tree-sitter-"
    exclude: tuple[str, ...] = ("tree-sitter-cli",)
    extra_targets: tuple[str, ...] = (
        "@tree-sitter-grammars/tree-sitter-zig",
        "@tlaplus/tree-sitter-tlaplus",
    )
    recipes: dict[str, Recipe] = field(default_factory=lambda: dict(DEFAULT_RECIPES))
    vendored_targets: tuple[str, ...] = ("tree-sitter-haskell",)
    prebuilt_artifacts: tuple[str, ...] = ("tree-sitter-purescript.wasm",)
    generate_command: tuple[str, ...] = ("pnpm", "tree-sitter", "generate")
    build_command: tuple[str, ...] = ("pnpm", "tree-sitter", "build-wasm", "{path}")
    artifact_glob: str = "*.wasm"

    def __post_init__(self) -> None:
        # out_dir is wiped every run; it must sit strictly inside the workspace.
        root = self.workspace_root.resolve()
        out = (root / self.out_dir).resolve()
        if out == root or root not in out.parents:
            raise ValueError(f"out_dir must be a subdirectory of the workspace, got {self.out_dir!r}")

    @property
    def out_path(self) -> Path:
        return self.workspace_root / self.out_dir

    @property
    def manifest_path(self) -> Path:
        return self.workspace_root / self.manifest

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, workspace_root: Path) -> BuildSettings:
        """Parse a validated config dict into settings."""
        recipes = dict(DEFAULT_RECIPES)
        for name, spec in data.get("recipes", {}).items():
            recipes[name] = recipe_from_dict(spec)

        kwargs: dict[str, Any] = {"workspace_root": workspace_root.resolve(), "recipes": recipes}
        for key in ("jobs", "out_dir", "manifest", "target_prefix", "artifact_glob"):
            if key in data:
                kwargs[key] = data[key]
        for key in (
            "exclude",
            "extra_targets",
            "vendored_targets",
            "prebuilt_artifacts",
            "generate_command",
            "build_command",
        ):
            if key in data:
                kwargs[key] = tuple(data[key])
        return cls(**kwargs)


def find_config(workspace_root: Path) -> Path | None:
    for name in CONFIG_FILENAMES:
        candidate = workspace_root / name
        if candidate.is_file():
            return candidate
    return None


def _read_config(path: Path) -> dict[str, Any]:
    try:
        if path.suffix == ".json":
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        else:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Malformed config at {path}: {e}") from e
    return data or {}


def load_settings(
    workspace_root: Path,
    config_path: Path | None = None,
) -> BuildSettings:
    """Load build settings for a workspace.

    Priority order:
    1. Explicit config path
    2. grammarbuild.yaml / .yml / .json in the workspace root
    3. Built-in defaults

    Raises:
        ConfigError: If the config file is unreadable, malformed or invalid
    """
    root = workspace_root.resolve()
    path = config_path or find_config(root)
    if path is None:
        return BuildSettings(workspace_root=root)
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    data = _read_config(path)
    try:
        validate_data(data, "build_config")
        return BuildSettings.from_dict(data, workspace_root=root)
    except ValueError as e:
        raise ConfigError(f"Invalid config structure in {path}: {e}") from e


def resolve_jobs(settings: BuildSettings, override: int | None = None) -> int:
    """Resolve worker count: CLI override, then env, then config, then host CPUs."""
    if override is not None:
        jobs = override
    elif os.getenv(JOBS_ENV):
        raw = os.environ[JOBS_ENV]
        try:
            jobs = int(raw)
        except ValueError as e:
            raise ConfigError(f"{JOBS_ENV} must be an integer, got {raw!r}") from e
    elif settings.jobs is not None:
        jobs = settings.jobs
    else:
        jobs = os.cpu_count() or 1
    if jobs < 1:
        raise ConfigError(f"jobs must be at least 1, got {jobs}")
    return jobs
