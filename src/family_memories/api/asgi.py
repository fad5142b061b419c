"""ASGI entrypoint for the family memories API."""

from family_memories.api.app import create_app
from family_memories.containers import build_container

app = create_app(build_container())
