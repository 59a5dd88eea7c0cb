"""ASGI entrypoint for the clinical nutrition API."""

from clinical_nutrition.api.app import create_app
from clinical_nutrition.containers import build_container

app = create_app(build_container())
