from __future__ import annotations

from typing import Dict, Protocol

from .models import Recipe


class StorageError(Exception):
    """Raised when a storage backend fails for a reason other than a missing key."""


class RecipeNotFound(KeyError):
    """Raised when no recipe is stored under the requested key."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Recipe '{key}' does not exist.")
        self.key = key

    def __str__(self) -> str:
        return self.args[0]


class RecipeAlreadyExists(Exception):
    """Raised when a recipe is added under a key that is already taken."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Recipe '{key}' already exists.")
        self.key = key


class RecipeRepository(Protocol):
    """Protocol describing the behaviour required by the web layer."""

    def key_for(self, recipe: Recipe) -> str:
        """Return the key a newly submitted recipe is stored under."""

    def add(self, key: str, recipe: Recipe) -> None:
        """Store a new recipe under ``key``."""

    def get(self, key: str) -> Recipe:
        """Return a single recipe or raise :class:`RecipeNotFound` if missing."""

    def list(self) -> Dict[str, Recipe]:
        """Return a snapshot of every stored recipe keyed by its key."""

    def update(self, key: str, recipe: Recipe) -> None:
        """Replace an existing recipe or raise :class:`RecipeNotFound`."""

    def remove(self, key: str) -> None:
        """Delete a recipe or raise :class:`RecipeNotFound`."""


__all__ = ["RecipeAlreadyExists", "RecipeNotFound", "RecipeRepository", "StorageError"]
