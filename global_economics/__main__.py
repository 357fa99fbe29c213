"""Allow ``python -m global_economics``."""

from global_economics.cli import app

app()
