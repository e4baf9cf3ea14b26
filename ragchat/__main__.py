"""Run the API server: ``python -m ragchat``."""

from ragchat.api.main import run

run()
