"""ASGI entrypoint for the BulkBuddy API."""

from bulkbuddy.api.app import create_app
from bulkbuddy.containers import build_container

app = create_app(build_container())
