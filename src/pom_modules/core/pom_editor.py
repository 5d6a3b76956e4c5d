"""
Module insertion for multi-module (aggregator) POMs.

The whole operation is a single pass: parse, check the root and packaging,
look for the module, append it when missing and write the re-indented
document. Nothing is written when the module is already declared.
"""

from __future__ import annotations

import io
import logging
import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, TextIO, Union

from lxml import etree as ET

from ..converters.xml_bridge import (
    DEFAULT_SETTINGS,
    XMLSettings,
    child_elements,
    first_child,
    local_name,
    namespace_of,
    parse_pom,
    qualified_name,
    serialize_pom,
    text_content,
)
from .descriptor import ModuleDescriptor
from .exceptions import (
    DuplicateSectionError,
    InvalidPackagingError,
    PomSerializationError,
    StructuralViolationError,
)

logger = logging.getLogger(__name__)

AGGREGATOR_PACKAGING = "pom"

# A POM root is either unqualified or in the Maven POM namespace
POM_NAMESPACES = (None, "http://maven.apache.org/POM/4.0.0")


@dataclass
class ModuleInsertion:
    """Outcome of adding a module to a POM file."""

    artifact_id: str
    pom_path: Path
    inserted: bool
    original: str
    updated: str
    backup_path: Optional[Path] = None

    @property
    def changed(self) -> bool:
        return self.original != self.updated


def insert_module_if_absent(
    artifact_id: str,
    source: TextIO,
    target: TextIO,
    settings: XMLSettings = DEFAULT_SETTINGS,
) -> bool:
    """
    Add ``artifact_id`` to the ``modules`` section unless it is already there.

    Args:
        artifact_id: Module name to declare. Written as element text, so no
            escaping is required from the caller.
        source: Character stream holding the POM.
        target: Character stream receiving the updated POM. Only written to
            when a module was inserted.
        settings: Parser and serializer settings.

    Returns:
        ``True`` if the module was added and the document written to
        ``target``, ``False`` if an identical module entry already existed.

    Raises:
        ValueError: if ``artifact_id`` is empty.
        MalformedPomError: if ``source`` is not acceptable XML.
        StructuralViolationError: if the root is not ``project``.
        DuplicateSectionError: if ``project`` has several ``modules``.
        InvalidPackagingError: if packaging is missing or not ``pom``.
        PomSerializationError: if the result cannot be written.
    """
    if not artifact_id:
        raise ValueError("artifact_id must be a non-empty string")

    tree = parse_pom(source, settings)
    project = _project_root(tree)
    _require_aggregator(project)
    modules = _modules_section(project)

    if modules is not None and _declares_module(modules, artifact_id):
        logger.info("Module %s already declared, leaving POM untouched", artifact_id)
        return False

    namespace = namespace_of(project)
    if modules is None:
        logger.debug("Creating modules section")
        modules = ET.SubElement(project, qualified_name(namespace, "modules"))

    module = ET.SubElement(modules, qualified_name(namespace, "module"))
    module.text = artifact_id

    serialize_pom(tree, target, settings)
    logger.info("Added module %s", artifact_id)
    return True


def list_modules(source: TextIO, settings: XMLSettings = DEFAULT_SETTINGS) -> List[str]:
    """Module names declared under ``project/modules``, in document order."""
    tree = parse_pom(source, settings)
    project = _project_root(tree)
    modules = _modules_section(project)
    if modules is None:
        return []
    return [text_content(module) for module in child_elements(modules, "module")]


def add_module_to_file(
    pom_path: Union[str, Path],
    artifact_id: str,
    encoding: str = "utf-8",
    backup: bool = False,
    dry_run: bool = False,
    settings: XMLSettings = DEFAULT_SETTINGS,
) -> ModuleInsertion:
    """
    Add a module to the POM at ``pom_path``.

    The updated document is written to a temporary file next to the POM and
    moved over it, so the POM is either fully replaced or left as it was.
    ``encoding`` only applies to reading; output is always UTF-8.
    No locking is done: callers that may race on the same file must
    coordinate themselves.
    """
    pom_path = Path(pom_path)
    original = pom_path.read_text(encoding=encoding)

    buffer = io.StringIO()
    inserted = insert_module_if_absent(artifact_id, io.StringIO(original), buffer, settings)
    updated = buffer.getvalue() if inserted else original

    result = ModuleInsertion(
        artifact_id=artifact_id,
        pom_path=pom_path,
        inserted=inserted,
        original=original,
        updated=updated,
    )
    if not inserted or dry_run:
        return result

    if backup:
        result.backup_path = pom_path.with_name(pom_path.name + ".bak")
        shutil.copy2(pom_path, result.backup_path)
        logger.debug("Backed up %s to %s", pom_path, result.backup_path)

    _replace_file(pom_path, updated)
    return result


def add_module_from_descriptor(
    descriptor: ModuleDescriptor,
    pom_path: Union[str, Path],
    **kwargs,
) -> ModuleInsertion:
    """Add the module described by ``descriptor`` (its ``id``) to ``pom_path``."""
    logger.debug("Adding module %s (%s) from directory %s", descriptor.id, descriptor.name, descriptor.dir)
    return add_module_to_file(pom_path, descriptor.id, **kwargs)


def _project_root(tree: ET._ElementTree) -> ET._Element:
    project = tree.getroot()
    if local_name(project) != "project" or namespace_of(project) not in POM_NAMESPACES:
        raise StructuralViolationError("Unable to find root element 'project'.")
    return project


def _require_aggregator(project: ET._Element) -> None:
    packaging_node = first_child(project, "packaging")
    packaging = text_content(packaging_node) if packaging_node is not None else None
    if packaging != AGGREGATOR_PACKAGING:
        raise InvalidPackagingError(packaging)


def _modules_section(project: ET._Element) -> Optional[ET._Element]:
    sections = child_elements(project, "modules")
    if len(sections) > 1:
        raise DuplicateSectionError("modules", len(sections))
    return sections[0] if sections else None


def _declares_module(modules: ET._Element, artifact_id: str) -> bool:
    return any(text_content(module) == artifact_id for module in child_elements(modules, "module"))


def _replace_file(pom_path: Path, content: str) -> None:
    fd, tmp_name = tempfile.mkstemp(prefix=f".{pom_path.name}.", suffix=".tmp", dir=pom_path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as tmp:
            tmp.write(content)
        shutil.copymode(pom_path, tmp_name)
        os.replace(tmp_name, pom_path)
    except OSError as e:
        Path(tmp_name).unlink(missing_ok=True)
        raise PomSerializationError(f"Unable to write {pom_path}: {e}") from e
