from __future__ import annotations

import logging
from typing import Dict

from .models import Recipe
from .slug import slugify
from .storage import RecipeAlreadyExists, RecipeNotFound, RecipeRepository

logger = logging.getLogger(__name__)


class InMemoryRecipeStorage(RecipeRepository):
    """Dictionary backed recipe storage.

    Nothing is persisted and there is no locking, so an instance must only be
    shared by callers that serialize their access to it.
    """

    def __init__(self) -> None:
        self._recipes: Dict[str, Recipe] = {}

    def key_for(self, recipe: Recipe) -> str:
        return slugify(recipe.name)

    def add(self, key: str, recipe: Recipe) -> None:
        if key in self._recipes:
            raise RecipeAlreadyExists(key)
        self._recipes[key] = recipe
        logger.debug("Added recipe %r", key)

    def get(self, key: str) -> Recipe:
        try:
            return self._recipes[key]
        except KeyError:
            raise RecipeNotFound(key) from None

    def list(self) -> Dict[str, Recipe]:
        return dict(self._recipes)

    def update(self, key: str, recipe: Recipe) -> None:
        if key not in self._recipes:
            raise RecipeNotFound(key)
        self._recipes[key] = recipe
        logger.debug("Updated recipe %r", key)

    def remove(self, key: str) -> None:
        try:
            del self._recipes[key]
        except KeyError:
            raise RecipeNotFound(key) from None
        logger.debug("Removed recipe %r", key)


__all__ = ["InMemoryRecipeStorage"]
