"""Drive one grammar build run from discovery to published artifacts."""

from __future__ import annotations

from functools import partial

from grammarbuild import ui
from grammarbuild.build.discover import discover_targets
from grammarbuild.build.executor import run_build_task
from grammarbuild.build.pool import Worker, run_pool
from grammarbuild.build.recipes import expand_tasks
from grammarbuild.build.staging import (
    build_vendored_targets,
    copy_prebuilt_artifacts,
    relocate_artifacts,
    reset_output_dir,
)
from grammarbuild.build.types import BuildTask, RunReport, RunState, Target
from grammarbuild.config import BuildSettings, resolve_jobs


def plan_tasks(targets: tuple[Target, ...]) -> list[BuildTask]:
    return [task for target in targets for task in expand_tasks(target)]


def exit_status(failed: bool) -> int:
    """0 when every task succeeded, 1 otherwise."""
    return 1 if failed else 0


def run_build(
    settings: BuildSettings,
    *,
    name_filter: str | None = None,
    jobs: int | None = None,
    worker: Worker | None = None,
) -> RunReport:
    """
    Build every selected grammar and publish artifacts into the output dir.

    Steps:
      1. resolve targets (manifest + extras, filtered)
      2. reset the output directory
      3. run all tasks on the pool, fail-open
      4. build vendored grammars, copy prebuilt artifacts
      5. on any failure stop; otherwise move artifacts into the output dir

    Raises:
        ConfigError: If the manifest or job count is unusable
    """
    targets = discover_targets(settings, name_filter)
    workers = resolve_jobs(settings, jobs)
    build = worker or partial(run_build_task, settings=settings)
    state = RunState(targets=targets, out_dir=settings.out_path)

    reset_output_dir(state.out_dir)

    run_pool(plan_tasks(targets), build, jobs=workers, on_outcome=state.record)

    build_vendored_targets(settings, state, build)
    copied = tuple(copy_prebuilt_artifacts(settings, state.out_dir))

    succeeded = sum(1 for outcome in state.outcomes if outcome.success)
    ui.summary(succeeded, len(state.outcomes))

    if state.failed:
        ui.skipped_relocation()
        return RunReport(
            outcomes=tuple(state.outcomes),
            failed=True,
            out_dir=state.out_dir,
            copied=copied,
        )

    moved = relocate_artifacts(
        settings.workspace_root,
        state.out_dir,
        settings.artifact_glob,
        keep=copied,
    )
    ui.relocated(len(moved), str(state.out_dir))
    return RunReport(
        outcomes=tuple(state.outcomes),
        failed=False,
        out_dir=state.out_dir,
        relocated=tuple(moved),
        copied=copied,
    )
