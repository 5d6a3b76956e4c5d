"""
Diff engine for previewing POM changes.

Produces unified diffs between a POM before and after a module insertion,
used by the CLI for ``--dry-run`` and ``--diff`` output.
"""

from __future__ import annotations

import difflib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from ..core.pom_editor import ModuleInsertion


@dataclass
class PomDiff:
    """Unified diff of a single POM change."""

    pom_path: Path
    artifact_id: str
    inserted: bool
    diff_lines: List[str] = field(default_factory=list)
    summary: Dict[str, int] = field(default_factory=dict)

    def __post_init__(self):
        """Calculate summary statistics."""
        self.summary = {
            "added_lines": len([l for l in self.diff_lines if l.startswith("+") and not l.startswith("+++")]),
            "removed_lines": len([l for l in self.diff_lines if l.startswith("-") and not l.startswith("---")]),
        }

    @property
    def diff_text(self) -> str:
        return "".join(self.diff_lines)

    @property
    def added_lines(self) -> int:
        return self.summary["added_lines"]

    @property
    def removed_lines(self) -> int:
        return self.summary["removed_lines"]

    @property
    def is_empty(self) -> bool:
        return not self.diff_lines

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "pom_path": str(self.pom_path),
            "artifact_id": self.artifact_id,
            "inserted": self.inserted,
            "diff": self.diff_text,
            "summary": self.summary,
        }


class DiffEngine:
    """Compares POM text before and after an edit."""

    def __init__(self, context_lines: int = 3):
        self.context_lines = context_lines

    def diff_text(self, before: str, after: str, name: str = "pom.xml") -> List[str]:
        """Unified diff lines between two versions of a document."""
        return list(difflib.unified_diff(
            before.splitlines(keepends=True),
            after.splitlines(keepends=True),
            fromfile=f"a/{name}",
            tofile=f"b/{name}",
            n=self.context_lines,
        ))

    def diff_insertion(self, insertion: ModuleInsertion) -> PomDiff:
        """Diff the original and updated text of a module insertion."""
        lines = []
        if insertion.inserted:
            lines = self.diff_text(insertion.original, insertion.updated, insertion.pom_path.name)
        return PomDiff(
            pom_path=insertion.pom_path,
            artifact_id=insertion.artifact_id,
            inserted=insertion.inserted,
            diff_lines=lines,
        )
