"""ASGI entrypoint for the meal swipe API."""

from meal_swipe.api.app import create_app
from meal_swipe.containers import build_container

app = create_app(build_container())
