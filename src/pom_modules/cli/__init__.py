"""
Command-line interface for pom-modules.
"""

from .app import app

__all__ = ["app"]
