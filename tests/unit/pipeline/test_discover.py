"""Unit tests for target discovery and filtering."""

from __future__ import annotations

from pathlib import Path

import pytest

from grammarbuild.build.discover import declared_targets, discover_targets, filter_targets, load_manifest
from grammarbuild.build.types import Recipe
from grammarbuild.config import BuildSettings, ConfigError

EXTRAS = ["@tree-sitter-grammars/tree-sitter-zig", "@tlaplus/tree-sitter-tlaplus"]


def test_declared_targets_filters_prefix_and_appends_extras(workspace: Path) -> None:
    settings = BuildSettings(workspace_root=workspace)

    names = declared_targets(load_manifest(settings.manifest_path), settings)

    assert names == [
        "tree-sitter-json",
        "tree-sitter-typescript",
        "tree-sitter-rescript",
        *EXTRAS,
    ]


def test_declared_targets_without_dev_dependencies(tmp_path: Path) -> None:
    settings = BuildSettings(workspace_root=tmp_path)
    assert declared_targets({"name": "x"}, settings) == EXTRAS


def test_declared_targets_drops_duplicate_extra(tmp_path: Path) -> None:
    settings = BuildSettings(workspace_root=tmp_path, extra_targets=("tree-sitter-json",))
    manifest = {"devDependencies": {"tree-sitter-json": "*"}}
    assert declared_targets(manifest, settings) == ["tree-sitter-json"]


@pytest.mark.parametrize(
    ("name_filter", "expected"),
    [
        (None, ["tree-sitter-json", "tree-sitter-tsx", "@tlaplus/tree-sitter-tlaplus"]),
        ("", ["tree-sitter-json", "tree-sitter-tsx", "@tlaplus/tree-sitter-tlaplus"]),
        ("ts", ["tree-sitter-tsx"]),
        ("tla", ["@tlaplus/tree-sitter-tlaplus"]),
        ("JSON", []),
        ("tree-sitter-", ["tree-sitter-json", "tree-sitter-tsx", "@tlaplus/tree-sitter-tlaplus"]),
    ],
)
def test_filter_is_case_sensitive_substring(name_filter: str | None, expected: list[str]) -> None:
    names = ["tree-sitter-json", "tree-sitter-tsx", "@tlaplus/tree-sitter-tlaplus"]
    assert filter_targets(names, name_filter) == expected


def test_discover_targets_resolves_recipes_and_roots(workspace: Path) -> None:
    settings = BuildSettings(workspace_root=workspace)

    targets = discover_targets(settings, "script")

    assert [t.name for t in targets] == ["tree-sitter-typescript", "tree-sitter-rescript"]
    assert targets[0].recipe == Recipe.multi_sub_path("typescript", "tsx")
    assert targets[1].recipe == Recipe.with_generation()
    assert targets[0].package_root == workspace / "node_modules" / "tree-sitter-typescript"


def test_missing_manifest_raises_config_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_manifest(tmp_path / "package.json")


def test_malformed_manifest_raises_config_error(tmp_path: Path) -> None:
    path = tmp_path / "package.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError, match="Malformed JSON"):
        load_manifest(path)


def test_non_object_manifest_raises_config_error(tmp_path: Path) -> None:
    path = tmp_path / "package.json"
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(ConfigError, match="JSON object"):
        load_manifest(path)
