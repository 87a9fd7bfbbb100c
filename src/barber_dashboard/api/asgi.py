"""ASGI entrypoint for the barber dashboard API."""

from barber_dashboard.api.app import create_app
from barber_dashboard.containers import build_container

app = create_app(build_container())
