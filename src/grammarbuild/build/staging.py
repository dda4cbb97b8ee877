"""Output directory staging and artifact finalization."""

from __future__ import annotations

import shutil
from collections.abc import Callable
from functools import partial
from pathlib import Path

from grammarbuild import ui
from grammarbuild.build.executor import run_build_task
from grammarbuild.build.pool import run_guarded
from grammarbuild.build.recipes import expand_tasks
from grammarbuild.build.types import BuildTask, Recipe, RunState, Target, TaskOutcome
from grammarbuild.config import BuildSettings


def reset_output_dir(out_dir: Path) -> Path:
    """Remove any previous output directory and create it fresh."""
    if out_dir.exists():
        shutil.rmtree(out_dir)
    out_dir.mkdir(parents=True)
    return out_dir


def vendored_targets(settings: BuildSettings) -> list[Target]:
    """Locally vendored grammar directories that exist beside the workspace manifest."""
    targets = []
    for name in settings.vendored_targets:
        root = settings.workspace_root / name
        if root.is_dir():
            targets.append(Target(name=name, recipe=Recipe.default(), package_root=root, local=True))
    return targets


def build_vendored_targets(
    settings: BuildSettings,
    state: RunState,
    worker: Callable[[BuildTask], TaskOutcome] | None = None,
) -> None:
    """Build vendored grammars after the pool drains, folding outcomes into the run."""
    build = worker or partial(run_build_task, settings=settings)
    for target in vendored_targets(settings):
        for task in expand_tasks(target):
            state.record(run_guarded(build, task))


def copy_prebuilt_artifacts(settings: BuildSettings, out_dir: Path) -> list[str]:
    """Copy precomputed artifacts from the workspace root into the output directory."""
    copied = []
    for name in settings.prebuilt_artifacts:
        source = settings.workspace_root / name
        if source.is_file():
            shutil.copyfile(source, out_dir / source.name)
            ui.copied(source.name)
            copied.append(source.name)
    return copied


def relocate_artifacts(
    workspace_root: Path,
    out_dir: Path,
    pattern: str,
    *,
    keep: tuple[str, ...] = (),
) -> list[str]:
    """Move every artifact matching ``pattern`` in the workspace root into ``out_dir``.

    Names in ``keep`` (prebuilt artifacts, already copied) stay in place.
    """
    moved = []
    for artifact in sorted(workspace_root.glob(pattern)):
        if not artifact.is_file() or artifact.name in keep:
            continue
        shutil.move(str(artifact), str(out_dir / artifact.name))
        moved.append(artifact.name)
    return moved
