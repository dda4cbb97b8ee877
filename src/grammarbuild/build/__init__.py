"""Grammar build pipeline: discovery, recipes, pool, staging."""

from grammarbuild.build.recipes import DEFAULT_RECIPES, expand_tasks, select_recipe
from grammarbuild.build.types import BuildTask, Recipe, RecipeKind, RunReport, Target, TaskOutcome

__all__ = [
    "DEFAULT_RECIPES",
    "BuildTask",
    "Recipe",
    "RecipeKind",
    "RunReport",
    "Target",
    "TaskOutcome",
    "expand_tasks",
    "select_recipe",
]
