"""Bounded-concurrency worker pool for build tasks."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, as_completed

from grammarbuild import ui
from grammarbuild.build.types import BuildTask, TaskOutcome

Worker = Callable[[BuildTask], TaskOutcome]


def crashed_outcome(task: BuildTask, exc: Exception) -> TaskOutcome:
    """Report a worker that raised instead of returning an outcome."""
    detail = f"{type(exc).__name__}: {exc}"
    ui.failed(task.label, detail)
    return TaskOutcome(task=task, success=False, error=detail)


def run_guarded(worker: Worker, task: BuildTask) -> TaskOutcome:
    """Run one task outside the pool with the same one-outcome guarantee."""
    try:
        return worker(task)
    except Exception as exc:  # one outcome per task, whatever the worker does
        return crashed_outcome(task, exc)


def _collect(future: Future[TaskOutcome], task: BuildTask) -> TaskOutcome:
    try:
        return future.result()
    except Exception as exc:  # one outcome per task, whatever the worker does
        return crashed_outcome(task, exc)


def run_pool(
    tasks: Sequence[BuildTask],
    worker: Worker,
    *,
    jobs: int,
    on_outcome: Callable[[TaskOutcome], None] | None = None,
) -> list[TaskOutcome]:
    """Run ``worker`` over every task with at most ``jobs`` in flight.

    Every task runs to completion regardless of sibling failures. Outcomes are
    gathered on the calling thread in completion order; the call returns only
    once all tasks have drained.
    """
    if jobs < 1:
        raise ValueError(f"jobs must be at least 1, got {jobs}")

    outcomes: list[TaskOutcome] = []
    if not tasks:
        return outcomes

    with ThreadPoolExecutor(max_workers=jobs, thread_name_prefix="grammarbuild") as executor:
        futures = {executor.submit(worker, task): task for task in tasks}
        for future in as_completed(futures):
            outcome = _collect(future, futures[future])
            outcomes.append(outcome)
            if on_outcome is not None:
                on_outcome(outcome)

    return outcomes
