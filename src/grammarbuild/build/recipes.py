"""Per-target build recipes and task expansion."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from grammarbuild.build.types import BuildTask, Recipe, Target

DEFAULT_RECIPES: dict[str, Recipe] = {
    "tree-sitter-rescript": Recipe.with_generation(),
    "tree-sitter-ocaml": Recipe.sub_path("ocaml"),
    "tree-sitter-php": Recipe.sub_path("php"),
    "tree-sitter-typescript": Recipe.multi_sub_path("typescript", "tsx"),
}


def recipe_from_dict(data: Mapping[str, Any]) -> Recipe:
    """Build a recipe from its config form ``{generate: bool, sub_paths: [...]}``."""
    generate = bool(data.get("generate", False))
    sub_paths = tuple(data.get("sub_paths", ()))
    if generate and sub_paths:
        raise ValueError("a recipe cannot combine generate with sub_paths")
    if generate:
        return Recipe.with_generation()
    if len(sub_paths) == 1:
        return Recipe.sub_path(sub_paths[0])
    if sub_paths:
        return Recipe.multi_sub_path(*sub_paths)
    return Recipe.default()


def select_recipe(name: str, table: Mapping[str, Recipe] | None = None) -> Recipe:
    """Return the recipe for ``name``; anything not in the table builds at its root."""
    recipes = DEFAULT_RECIPES if table is None else table
    return recipes.get(name, Recipe.default())


def expand_tasks(target: Target) -> list[BuildTask]:
    """Expand a target into its build tasks, one per sub-path in declared order."""
    recipe = target.recipe
    if not recipe.sub_paths:
        return [
            BuildTask(
                target=target.name,
                sub_path=None,
                cwd=target.package_root,
                generate=recipe.needs_generation,
                local=target.local,
            )
        ]
    return [
        BuildTask(
            target=target.name,
            sub_path=sub_path,
            cwd=target.package_root / sub_path,
            generate=recipe.needs_generation,
            local=target.local,
        )
        for sub_path in recipe.sub_paths
    ]
