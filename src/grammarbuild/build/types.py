"""Types for grammar build runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class RecipeKind(str, Enum):
    """Closed set of per-target build variants."""

    DEFAULT = "default"
    WITH_GENERATION = "with_generation"
    SUB_PATH = "sub_path"
    MULTI_SUB_PATH = "multi_sub_path"


@dataclass(frozen=True)
class Recipe:
    """Build variant for one target: where to build and whether to generate first."""

    kind: RecipeKind
    sub_paths: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        count = len(self.sub_paths)
        if self.kind in (RecipeKind.DEFAULT, RecipeKind.WITH_GENERATION) and count:
            raise ValueError(f"{self.kind.value} recipe takes no sub-paths, got {count}")
        if self.kind is RecipeKind.SUB_PATH and count != 1:
            raise ValueError(f"sub_path recipe takes exactly one sub-path, got {count}")
        if self.kind is RecipeKind.MULTI_SUB_PATH and count < 2:
            raise ValueError(f"multi_sub_path recipe takes two or more sub-paths, got {count}")

    @classmethod
    def default(cls) -> Recipe:
        return cls(RecipeKind.DEFAULT)

    @classmethod
    def with_generation(cls) -> Recipe:
        return cls(RecipeKind.WITH_GENERATION)

    @classmethod
    def sub_path(cls, path: str) -> Recipe:
        return cls(RecipeKind.SUB_PATH, (path,))

    @classmethod
    def multi_sub_path(cls, *paths: str) -> Recipe:
        return cls(RecipeKind.MULTI_SUB_PATH, tuple(paths))

    @property
    def needs_generation(self) -> bool:
        return self.kind is RecipeKind.WITH_GENERATION


@dataclass(frozen=True)
class Target:
    """One named grammar package resolved to a directory on disk."""

    name: str
    recipe: Recipe
    package_root: Path
    local: bool = False


@dataclass(frozen=True)
class BuildTask:
    """One toolchain invocation unit derived from a target."""

    target: str
    sub_path: str | None
    cwd: Path
    generate: bool = False
    local: bool = False

    @property
    def label(self) -> str:
        base = f"{self.target}/{self.sub_path}" if self.sub_path else self.target
        return f"{base} (local)" if self.local else base


@dataclass(frozen=True)
class TaskOutcome:
    """Result of one build task; produced exactly once per task."""

    task: BuildTask
    success: bool
    error: str | None = None
    duration_s: float = 0.0


@dataclass
class RunState:
    """Process-wide state of one invocation; the outcome log only ever grows."""

    targets: tuple[Target, ...]
    out_dir: Path
    outcomes: list[TaskOutcome] = field(default_factory=list)

    def record(self, outcome: TaskOutcome) -> None:
        self.outcomes.append(outcome)

    @property
    def failed(self) -> bool:
        return any(not outcome.success for outcome in self.outcomes)


@dataclass(frozen=True)
class RunReport:
    """Final view of a build run."""

    outcomes: tuple[TaskOutcome, ...]
    failed: bool
    out_dir: Path
    relocated: tuple[str, ...] = ()
    copied: tuple[str, ...] = ()

    @property
    def succeeded(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.success)
