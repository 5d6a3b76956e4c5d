"""
Errors raised while reading, validating or writing a POM.
"""

from __future__ import annotations

from typing import Optional


class PomModuleError(Exception):
    """Base class for every failure surfaced by pom-modules."""


class MalformedPomError(PomModuleError):
    """The input is not well-formed XML or declares a DOCTYPE."""


class StructuralViolationError(PomModuleError):
    """The document is XML but not shaped like a POM."""


class DuplicateSectionError(StructuralViolationError):
    """A section that must be unique appears more than once under project."""

    def __init__(self, section: str, count: int):
        self.section = section
        self.count = count
        super().__init__(
            f"Found {count} '{section}' elements under 'project', expected at most one."
        )


class InvalidPackagingError(PomModuleError):
    """The project is not an aggregator (packaging other than 'pom')."""

    def __init__(self, packaging: Optional[str], message: Optional[str] = None):
        self.packaging = packaging
        super().__init__(
            message
            or "Unable to add module to the current project as it is not of packaging type 'pom'"
        )


class PomSerializationError(PomModuleError):
    """The updated document could not be serialized or written."""
