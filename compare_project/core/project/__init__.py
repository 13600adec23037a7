"""
Project file module.

Provides functionality for:
- Reading comparison projects from XML with a streaming reader
- Writing projects back with per-field persist decisions
- Holding the item list of an open project
"""

from compare_project.core.project.reader import (
    ProjectReader,
    ReaderState,
    read_project_items,
)
from compare_project.core.project.writer import (
    ProjectWriter,
    serialize_project_items,
    write_project_items,
)
from compare_project.core.project.project_file import ProjectFile

__all__ = [
    # Reader
    'ProjectReader',
    'ReaderState',
    'read_project_items',
    # Writer
    'ProjectWriter',
    'serialize_project_items',
    'write_project_items',
    # Project
    'ProjectFile',
]
