"""
XML reading and writing helpers.
"""

from .xml_bridge import (
    XMLSettings,
    DEFAULT_SETTINGS,
    parse_pom,
    serialize_pom,
    local_name,
    child_elements,
    first_child,
    text_content,
)

__all__ = [
    "XMLSettings",
    "DEFAULT_SETTINGS",
    "parse_pom",
    "serialize_pom",
    "local_name",
    "child_elements",
    "first_child",
    "text_content",
]
