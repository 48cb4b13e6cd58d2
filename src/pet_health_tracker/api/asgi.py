"""ASGI entrypoint for the pet health tracker API."""

from pet_health_tracker.api.app import create_app
from pet_health_tracker.containers import build_container

app = create_app(build_container())
