"""Locate grammar package directories on disk."""

from __future__ import annotations

from pathlib import Path

NODE_MODULES = "node_modules"


def _package_dir(base: Path, name: str) -> Path:
    # Scoped names (@scope/pkg) map onto nested directories.
    return base.joinpath(NODE_MODULES, *name.split("/"))


def resolve_package_root(name: str, start: Path) -> Path | None:
    """Resolve a package the way node does: nearest node_modules walking upward."""
    current = start.resolve()
    for directory in (current, *current.parents):
        candidate = _package_dir(directory, name)
        if (candidate / "package.json").is_file():
            return candidate
    return None


def locate_package_root(name: str, workspace_root: Path) -> Path:
    """Return the package root for ``name``; falls back to workspace node_modules."""
    resolved = resolve_package_root(name, workspace_root)
    if resolved is not None:
        return resolved
    return _package_dir(workspace_root.resolve(), name)
