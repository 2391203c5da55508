"""wpdeploy-cli: Command-line entry point for WordPress deployment validation."""

from __future__ import annotations

__version__ = "0.1.0"
