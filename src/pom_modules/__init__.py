"""
pom-modules: safe, idempotent module insertion for Maven aggregator POMs.
"""

from .core.exceptions import (
    PomModuleError,
    MalformedPomError,
    StructuralViolationError,
    DuplicateSectionError,
    InvalidPackagingError,
    PomSerializationError,
)
from .core.pom_editor import (
    ModuleInsertion,
    insert_module_if_absent,
    list_modules,
    add_module_to_file,
    add_module_from_descriptor,
)
from .core.descriptor import ModuleDescriptor

__version__ = "0.1.0"

__all__ = [
    "PomModuleError",
    "MalformedPomError",
    "StructuralViolationError",
    "DuplicateSectionError",
    "InvalidPackagingError",
    "PomSerializationError",
    "ModuleInsertion",
    "insert_module_if_absent",
    "list_modules",
    "add_module_to_file",
    "add_module_from_descriptor",
    "ModuleDescriptor",
]
