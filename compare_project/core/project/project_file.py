"""
Project file holding a list of comparison definitions.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from compare_project.core.models import ProjectFileError, ProjectItem
from compare_project.core.project.reader import read_project_items
from compare_project.core.project.writer import write_project_items

if TYPE_CHECKING:
    from compare_project.services.settings import ProjectSaveOptions


class ProjectFile:
    """
    In-memory project: an ordered list of items with read/save to XML.

    read() and save() report success as a bool; the failure of the last
    call is kept in ``last_error``.
    """

    # File extension for project files
    PROJECT_FILE_EXT = "WinMerge"

    def __init__(self, items: Optional[list[ProjectItem]] = None):
        self.items: list[ProjectItem] = items if items is not None else []
        self.last_error: Optional[ProjectFileError] = None

    @classmethod
    def is_project_file(cls, path: Path | str) -> bool:
        """Check if a path carries the project file extension."""
        return Path(path).suffix.lower() == f".{cls.PROJECT_FILE_EXT.lower()}"

    def add_item(self, item: ProjectItem) -> None:
        self.items.append(item)

    def read(self, path: Path | str) -> bool:
        """
        Read items from a project file, replacing the current items.

        On failure the current items are kept.
        """
        try:
            items = read_project_items(path)
        except ProjectFileError as e:
            logging.error(f"ProjectFile - Failed to read project: {e}")
            self.last_error = e
            return False

        self.items = items
        self.last_error = None
        logging.info(f"ProjectFile - Loaded {len(items)} item(s) from {path}")
        return True

    def save(self, path: Path | str) -> bool:
        """Write the current items to a project file."""
        try:
            write_project_items(path, self.items)
        except ProjectFileError as e:
            logging.error(f"ProjectFile - Failed to save project: {e}")
            self.last_error = e
            return False

        self.last_error = None
        logging.info(f"ProjectFile - Saved {len(self.items)} item(s) to {path}")
        return True

    def apply_save_options(self, options: ProjectSaveOptions) -> None:
        """Apply a save policy to every item."""
        for item in self.items:
            options.apply(item)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)
