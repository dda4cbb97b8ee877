"""Pytest configuration and fixtures for grammarbuild tests."""

from __future__ import annotations

import json
import threading
from pathlib import Path

import pytest

from grammarbuild.exec import ExecError, ExecResult

BUILD_PREFIX = ("pnpm", "tree-sitter", "build-wasm")
GENERATE_PREFIX = ("pnpm", "tree-sitter", "generate")


class FakeToolchain:
    """Stand-in for run_command that mimics `tree-sitter build-wasm`.

    Builds write ``<grammar dir name>.wasm`` into the command cwd; grammar dir
    names listed in ``fail`` exit non-zero instead.
    """

    def __init__(self, fail: tuple[str, ...] = ()):
        self.fail = set(fail)
        self.calls: list[tuple[tuple[str, ...], Path]] = []
        self._lock = threading.Lock()

    def __call__(self, argv: list[str], *, cwd: Path) -> ExecResult:
        with self._lock:
            self.calls.append((tuple(argv), cwd))
        result = ExecResult(argv=tuple(argv), cwd=cwd, returncode=0, stdout="", stderr="")
        if tuple(argv[:3]) == BUILD_PREFIX:
            grammar_dir = Path(argv[3])
            if grammar_dir.name in self.fail:
                failed = ExecResult(
                    argv=tuple(argv),
                    cwd=cwd,
                    returncode=1,
                    stdout="",
                    stderr=f"error: no grammar.json in {grammar_dir}",
                )
                raise ExecError(failed)
            (cwd / f"{grammar_dir.name}.wasm").write_bytes(b"\0asm")
        return result

    def commands(self, prefix: tuple[str, ...]) -> list[tuple[tuple[str, ...], Path]]:
        return [(argv, cwd) for argv, cwd in self.calls if argv[: len(prefix)] == prefix]


def write_manifest(root: Path, dev_dependencies: list[str]) -> Path:
    manifest = root / "package.json"
    manifest.write_text(
        json.dumps({"name": "parsers", "devDependencies": {name: "*" for name in dev_dependencies}}),
        encoding="utf-8",
    )
    return manifest


@pytest.fixture(autouse=True)
def _plain_output(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GRAMMARBUILD_PLAIN", "1")
    monkeypatch.delenv("GRAMMARBUILD_JOBS", raising=False)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    root = tmp_path / "parsers"
    root.mkdir()
    write_manifest(
        root,
        [
            "tree-sitter-cli",
            "tree-sitter-json",
            "tree-sitter-typescript",
            "tree-sitter-rescript",
            "typescript",
        ],
    )
    return root


@pytest.fixture
def toolchain(monkeypatch: pytest.MonkeyPatch) -> FakeToolchain:
    fake = FakeToolchain()
    monkeypatch.setattr("grammarbuild.build.executor.run_command", fake)
    return fake


@pytest.fixture
def make_workspace(tmp_path: Path):
    """Factory for a workspace whose package.json declares the given dev-dependencies."""

    def _make(dev_dependencies: list[str], name: str = "ws") -> Path:
        root = tmp_path / name
        root.mkdir()
        write_manifest(root, dev_dependencies)
        return root

    return _make
