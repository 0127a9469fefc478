"""ASGI entrypoint for the wedding invitations API."""

from wedding_invites.api.app import create_app
from wedding_invites.containers import build_container

app = create_app(build_container())
