"""ASGI entrypoint for the couple space API."""

from couple_space.api.app import create_app
from couple_space.containers import build_container

app = create_app(build_container())
