"""Command-line interface for zerotrust-engine.

Provides commands for evaluating access requests, scoring trust, checking
compliance and inspecting policy files.
"""

from .main import cli, main

__all__ = ["cli", "main"]
