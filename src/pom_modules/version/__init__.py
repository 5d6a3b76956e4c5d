"""
Change preview for POM edits.
"""

from .diff_engine import PomDiff, DiffEngine

__all__ = ["PomDiff", "DiffEngine"]
