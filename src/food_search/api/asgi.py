"""ASGI entrypoint for the food search API."""

from food_search.api.app import create_app
from food_search.containers import build_container

app = create_app(build_container())
