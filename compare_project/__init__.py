"""
Comparison project files.

Reads and writes lists of two-way and three-way comparison definitions
(paths, read-only flags and comparison options) stored as XML.
"""

from compare_project.core.models import (
    PathContext,
    ProjectItem,
    ProjectCompareMethod,
    WhitespaceMode,
    ProjectFileError,
    ProjectParseError,
    ProjectWriteError,
)
from compare_project.core.project import ProjectFile

__version__ = "1.1.0"

__all__ = [
    'PathContext',
    'ProjectItem',
    'ProjectCompareMethod',
    'WhitespaceMode',
    'ProjectFileError',
    'ProjectParseError',
    'ProjectWriteError',
    'ProjectFile',
]
