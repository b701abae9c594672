"""ASGI entrypoint for the carb cycle API."""

from carb_cycle.api.app import create_app
from carb_cycle.containers import build_container

app = create_app(build_container())
