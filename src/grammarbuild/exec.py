"""Toolchain command runner.

Every command runs in an explicit working directory; the process cwd is never
changed. Toolchain output is decoded as UTF-8 with undecodable bytes replaced,
since compilers happily echo raw source bytes into their diagnostics.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ExecResult:
    """Captured toolchain invocation."""

    argv: tuple[str, ...]
    cwd: Path
    returncode: int
    stdout: str
    stderr: str

    @property
    def detail(self) -> str:
        """Most useful captured output for a failure report."""
        return (self.stderr or self.stdout).strip()


class ExecError(RuntimeError):
    """Raised when a toolchain command exits non-zero."""

    def __init__(self, result: ExecResult):
        rendered = " ".join(result.argv)
        super().__init__(f"command failed ({result.returncode}): {rendered}\n{result.detail}")
        self.result = result


def run_command(argv: list[str], *, cwd: Path) -> ExecResult:
    """Run one toolchain command in ``cwd``.

    Raises:
        ExecError: If the command exits non-zero
        OSError: If the executable or ``cwd`` does not exist
    """
    completed = subprocess.run(
        argv,
        cwd=cwd,
        capture_output=True,
        encoding="utf-8",
        errors="replace",
        check=False,
    )
    result = ExecResult(
        argv=tuple(argv),
        cwd=cwd.resolve(),
        returncode=completed.returncode,
        stdout=completed.stdout,
        stderr=completed.stderr,
    )
    if result.returncode != 0:
        raise ExecError(result)
    return result


def render_command(template: list[str] | tuple[str, ...], *, path: Path) -> list[str]:
    """Substitute ``{path}`` placeholders in a command template."""
    return [part.replace("{path}", str(path)) for part in template]
