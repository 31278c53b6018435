"""ASGI entry point: ``hypercorn vidshare.asgi:app``."""

from vidshare.app_factory import create_app
from vidshare.lib import observability

app = observability.instrument_app(create_app())
