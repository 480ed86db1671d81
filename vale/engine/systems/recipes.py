"""
RecipeBook: crafting table keyed by unordered item-name pairs.

combine("branch", "cloth") and combine("cloth", "branch") hit the same
entry; a pair of identical names is a valid key too.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Optional


@dataclass(frozen=True)
class Recipe:
    first: str
    second: str
    result: str


def recipe_key(a: str, b: str) -> tuple[str, str]:
    return (a, b) if a <= b else (b, a)


class RecipeBook:
    """Lookup of unordered ingredient pairs to the crafted item."""

    def __init__(self, recipes: Iterable[Recipe] = ()) -> None:
        self._recipes: Dict[tuple[str, str], Recipe] = {}
        for recipe in recipes:
            self.add(recipe)

    def add(self, recipe: Recipe) -> None:
        self._recipes[recipe_key(recipe.first, recipe.second)] = recipe

    def lookup(self, a: str, b: str) -> Optional[str]:
        """Return the crafted item name, or None if the pair is no recipe."""
        recipe = self._recipes.get(recipe_key(a, b))
        return recipe.result if recipe else None

    def __len__(self) -> int:
        return len(self._recipes)
