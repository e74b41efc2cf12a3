"""
File utilities shared by the settings importer.
"""

from .atomic_write import (
    atomic_write_text,
    atomic_write_json,
)

__all__ = [
    "atomic_write_text",
    "atomic_write_json",
]
