"""Flask CLI commands (``flask seed ...``)."""

from __future__ import annotations

from flask import Flask

from .seed import seed_cli


def init_app(app: Flask) -> None:
    """Attach the ``seed`` command group to ``app.cli``."""
    app.cli.add_command(seed_cli)
