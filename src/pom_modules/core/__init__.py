"""
Core POM error types and descriptor records.

The editing operations live in :mod:`pom_modules.core.pom_editor`.
"""

from .exceptions import (
    PomModuleError,
    MalformedPomError,
    StructuralViolationError,
    DuplicateSectionError,
    InvalidPackagingError,
    PomSerializationError,
)
from .descriptor import ModuleDescriptor

__all__ = [
    "PomModuleError",
    "MalformedPomError",
    "StructuralViolationError",
    "DuplicateSectionError",
    "InvalidPackagingError",
    "PomSerializationError",
    "ModuleDescriptor",
]
