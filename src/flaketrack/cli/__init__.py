"""Command line interface for flaketrack."""

from __future__ import annotations

from flaketrack.cli.root import cli, create_app, main

__all__ = ["cli", "create_app", "main"]
