"""
Module descriptor record as found in archetype metadata.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Union

import yaml
from pydantic import BaseModel, Field


class ModuleDescriptor(BaseModel):
    """A submodule of a multi-module archetype: its artifact id, directory and display name."""

    id: str = Field(..., min_length=1)
    dir: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ModuleDescriptor:
        """Create from a mapping, accepting an optional top-level ``module`` key."""
        if isinstance(data.get("module"), dict):
            data = data["module"]
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> ModuleDescriptor:
        """Load a descriptor from a YAML file; malformed YAML raises ``ValueError``."""
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Descriptor {path} is not valid YAML: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Descriptor {path} must contain a mapping")
        return cls.from_dict(data)
