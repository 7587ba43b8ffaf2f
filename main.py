"""WSGI entrypoint for the recipe API.

The Flask development server is not started from this module; run it with
``flask --app main run`` or point a WSGI server such as Gunicorn at
``main:app``. The storage backend is chosen through ``RECIPE_STORAGE``.
"""

from recipe_api import create_app

app = create_app()


__all__ = ["app"]
