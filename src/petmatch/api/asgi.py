"""ASGI entrypoint for the PetMatch API."""

from petmatch.api.app import create_app
from petmatch.containers import build_container

app = create_app(build_container())
