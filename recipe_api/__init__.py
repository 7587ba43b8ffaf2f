import atexit
import logging
import os
from typing import Optional, Tuple

from flask import Flask, Response, jsonify, request

from .logging_config import configure_logging
from .memory_storage import InMemoryRecipeStorage
from .models import Recipe
from .slug import slugify
from .sql_storage import SqlRecipeStorage
from .storage import RecipeNotFound, RecipeRepository, StorageError

logger = logging.getLogger(__name__)

STORAGE_BACKENDS = ("sql", "memory")


def create_app(storage: Optional[RecipeRepository] = None) -> Flask:
    """Create and configure the Flask application.

    Parameters
    ----------
    storage:
        Optional recipe repository. When ``None`` the backend named by the
        ``RECIPE_STORAGE`` environment variable is built (``sql`` by default).
    """

    configure_logging(os.environ.get("LOG_LEVEL", "INFO"))

    app = Flask(__name__)

    if storage is None:
        storage = _storage_from_env()
    app.config["RECIPE_STORAGE"] = storage

    @app.get("/")
    def home_page() -> Response:
        return jsonify(message="Welcome to the home page")

    @app.get("/recipes")
    def list_recipes() -> Tuple[Response, int]:
        storage_backend: RecipeRepository = app.config["RECIPE_STORAGE"]

        try:
            recipes = storage_backend.list()
        except Exception as exc:
            return _server_error(exc, "list recipes")

        return jsonify({key: recipe.to_dict() for key, recipe in recipes.items()}), 200

    @app.post("/recipes")
    def create_recipe() -> Tuple[Response, int]:
        storage_backend: RecipeRepository = app.config["RECIPE_STORAGE"]

        try:
            recipe = Recipe.from_dict(request.get_json(silent=True))
        except ValueError as exc:
            return _error(exc, 400)

        try:
            storage_backend.add(storage_backend.key_for(recipe), recipe)
        except Exception as exc:
            return _server_error(exc, "create recipe")

        return jsonify(status="success"), 200

    @app.get("/recipes/<recipe_id>")
    def get_recipe(recipe_id: str) -> Tuple[Response, int]:
        storage_backend: RecipeRepository = app.config["RECIPE_STORAGE"]

        try:
            recipe = storage_backend.get(recipe_id)
        except RecipeNotFound as exc:
            return _error(exc, 404)
        except Exception as exc:
            return _server_error(exc, "get recipe")

        return jsonify(recipe.to_dict()), 200

    @app.put("/recipes/<recipe_id>")
    def update_recipe(recipe_id: str) -> Tuple[Response, int]:
        storage_backend: RecipeRepository = app.config["RECIPE_STORAGE"]

        try:
            recipe = Recipe.from_dict(request.get_json(silent=True))
        except ValueError as exc:
            return _error(exc, 400)

        try:
            storage_backend.update(recipe_id, recipe)
        except RecipeNotFound as exc:
            return _error(exc, 404)
        except Exception as exc:
            return _server_error(exc, "update recipe")

        return jsonify(status="success"), 200

    @app.delete("/recipes/<recipe_id>")
    def delete_recipe(recipe_id: str) -> Tuple[Response, int]:
        storage_backend: RecipeRepository = app.config["RECIPE_STORAGE"]

        try:
            storage_backend.remove(recipe_id)
        except RecipeNotFound as exc:
            return _error(exc, 404)
        except Exception as exc:
            return _server_error(exc, "delete recipe")

        return jsonify(status="success"), 200

    return app


def _storage_from_env() -> RecipeRepository:
    backend = os.environ.get("RECIPE_STORAGE", "sql").strip().lower()

    if backend == "memory":
        logger.info("Using in-memory recipe storage")
        return InMemoryRecipeStorage()

    if backend == "sql":
        storage = SqlRecipeStorage.from_env()
        try:
            storage.create_schema()
        except StorageError:
            storage.close()
            raise
        atexit.register(storage.close)
        logger.info("Using SQL recipe storage")
        return storage

    raise RuntimeError(
        f"Unknown RECIPE_STORAGE backend {backend!r}. Expected one of: {', '.join(STORAGE_BACKENDS)}."
    )


def _error(exc: Exception, status: int) -> Tuple[Response, int]:
    return jsonify(error=str(exc)), status


def _server_error(exc: Exception, action: str) -> Tuple[Response, int]:
    logger.exception("Failed to %s", action)
    return _error(exc, 500)


__all__ = ["create_app", "Recipe", "slugify"]
