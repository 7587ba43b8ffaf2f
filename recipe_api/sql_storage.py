from __future__ import annotations

import logging
import os
import re
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from .models import Recipe
from .storage import RecipeNotFound, RecipeRepository, StorageError

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///recipes.db"
DEFAULT_TABLE_NAME = "recipe"

_TABLE_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class SqlRecipeStorage(RecipeRepository):
    """Relational recipe storage backed by a single SQLAlchemy engine.

    The table has a ``name`` primary key and a ``description`` column. Rows
    are keyed by the raw recipe name, so :meth:`key_for` does not slugify.
    Each operation is one statement in its own transaction; database errors
    surface as :class:`StorageError`.
    """

    def __init__(
        self,
        *,
        url: str = DEFAULT_DATABASE_URL,
        table_name: str = DEFAULT_TABLE_NAME,
        engine: Optional[Engine] = None,
    ) -> None:
        if not _TABLE_NAME_RE.match(table_name):
            raise ValueError(f"Invalid table name: {table_name!r}")

        self._table_name = table_name
        self._engine = engine if engine is not None else create_engine(url)

    @classmethod
    def from_env(cls) -> "SqlRecipeStorage":
        """Build a storage instance from environment variables."""

        url = os.environ.get("DATABASE_URL", DEFAULT_DATABASE_URL)
        table_name = os.environ.get("RECIPES_TABLE", DEFAULT_TABLE_NAME)
        return cls(url=url, table_name=table_name)

    def __enter__(self) -> "SqlRecipeStorage":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Release every pooled connection held by the engine."""

        self._engine.dispose()

    def create_schema(self) -> None:
        with self._transaction() as conn:
            conn.execute(
                text(
                    f"CREATE TABLE IF NOT EXISTS {self._table_name} ("
                    "name VARCHAR(255) NOT NULL PRIMARY KEY, "
                    "description TEXT NOT NULL)"
                )
            )

    def key_for(self, recipe: Recipe) -> str:
        return recipe.name

    def add(self, key: str, recipe: Recipe) -> None:
        # Duplicate keys fail on the primary key and surface as StorageError.
        with self._transaction() as conn:
            conn.execute(
                text(f"INSERT INTO {self._table_name} (name, description) VALUES (:name, :description)"),
                {"name": key, "description": recipe.description},
            )
        logger.debug("Inserted recipe %r", key)

    def get(self, key: str) -> Recipe:
        with self._transaction() as conn:
            row = conn.execute(
                text(f"SELECT name, description FROM {self._table_name} WHERE name = :name"),
                {"name": key},
            ).first()

        if row is None:
            raise RecipeNotFound(key)
        return Recipe(name=row.name, description=row.description)

    def list(self) -> Dict[str, Recipe]:
        with self._transaction() as conn:
            rows = conn.execute(text(f"SELECT name, description FROM {self._table_name}")).all()

        return {row.name: Recipe(name=row.name, description=row.description) for row in rows}

    def update(self, key: str, recipe: Recipe) -> None:
        with self._transaction() as conn:
            result = conn.execute(
                text(f"UPDATE {self._table_name} SET description = :description WHERE name = :name"),
                {"name": key, "description": recipe.description},
            )
            if result.rowcount == 0:
                raise RecipeNotFound(key)
        logger.debug("Updated recipe %r", key)

    def remove(self, key: str) -> None:
        with self._transaction() as conn:
            result = conn.execute(
                text(f"DELETE FROM {self._table_name} WHERE name = :name"),
                {"name": key},
            )
            if result.rowcount == 0:
                raise RecipeNotFound(key)
        logger.debug("Deleted recipe %r", key)

    @contextmanager
    def _transaction(self) -> Iterator[Connection]:
        try:
            with self._engine.begin() as conn:
                yield conn
        except SQLAlchemyError as exc:
            logger.error("Recipe table %r query failed: %s", self._table_name, exc)
            raise StorageError(str(exc)) from exc


__all__ = ["SqlRecipeStorage", "DEFAULT_DATABASE_URL", "DEFAULT_TABLE_NAME"]
