"""Run the toolchain for a single build task."""

from __future__ import annotations

import subprocess
import time

from grammarbuild import ui
from grammarbuild.build.types import BuildTask, TaskOutcome
from grammarbuild.config import BuildSettings
from grammarbuild.exec import ExecError, render_command, run_command


def _failure_detail(exc: Exception) -> str:
    if isinstance(exc, ExecError):
        return str(exc)
    return f"{type(exc).__name__}: {exc}"


def run_build_task(task: BuildTask, settings: BuildSettings) -> TaskOutcome:
    """Generate (when required) and build one task.

    Generation runs inside the grammar directory; the build runs from the
    workspace root so the toolchain drops its artifact there. Failures are
    reported and returned as an unsuccessful outcome, never raised.
    """
    ui.building(task.label)
    started = time.monotonic()
    try:
        if task.generate:
            run_command(render_command(settings.generate_command, path=task.cwd), cwd=task.cwd)
        run_command(
            render_command(settings.build_command, path=task.cwd),
            cwd=settings.workspace_root,
        )
    except (ExecError, OSError, UnicodeError, subprocess.SubprocessError) as exc:
        detail = _failure_detail(exc)
        ui.failed(task.label, detail)
        return TaskOutcome(
            task=task,
            success=False,
            error=detail,
            duration_s=time.monotonic() - started,
        )

    ui.finished(task.label)
    return TaskOutcome(task=task, success=True, duration_s=time.monotonic() - started)
