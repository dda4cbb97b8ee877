"""Target discovery from the workspace package manifest."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from grammarbuild.build.locator import locate_package_root
from grammarbuild.build.recipes import select_recipe
from grammarbuild.build.types import Target
from grammarbuild.config import BuildSettings, ConfigError


def load_manifest(path: Path) -> dict[str, Any]:
    """Load the workspace package.json.

    Raises:
        ConfigError: If the manifest is missing, malformed or not an object
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Package manifest not found: {path}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read package manifest {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Malformed JSON in package manifest {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Package manifest must be a JSON object: {path}")
    return data


def declared_targets(manifest: dict[str, Any], settings: BuildSettings) -> list[str]:
    """Grammar dev-dependencies in declaration order, then the extra targets."""
    dev_deps = manifest.get("devDependencies") or {}
    if not isinstance(dev_deps, dict):
        raise ConfigError("devDependencies must be a JSON object")

    names: list[str] = []
    for name in [*dev_deps, *settings.extra_targets]:
        if name in names:
            continue
        if name in settings.extra_targets or (
            name.startswith(settings.target_prefix) and name not in settings.exclude
        ):
            names.append(name)
    return names


def filter_targets(names: list[str], name_filter: str | None) -> list[str]:
    """Keep names containing ``name_filter`` (case-sensitive); no filter keeps all."""
    if not name_filter:
        return list(names)
    return [name for name in names if name_filter in name]


def resolve_targets(names: list[str], settings: BuildSettings) -> tuple[Target, ...]:
    return tuple(
        Target(
            name=name,
            recipe=select_recipe(name, settings.recipes),
            package_root=locate_package_root(name, settings.workspace_root),
        )
        for name in names
    )


def discover_targets(settings: BuildSettings, name_filter: str | None = None) -> tuple[Target, ...]:
    """Compute the run's target set once: manifest + extras, filtered, resolved."""
    manifest = load_manifest(settings.manifest_path)
    names = filter_targets(declared_targets(manifest, settings), name_filter)
    return resolve_targets(names, settings)
