"""
Core data models for comparison project files.

This module defines the structures shared by the project reader and writer:
- Path context (two-way or three-way set of compared locations)
- Project items (paths, read-only flags and comparison options)
- Option enumerations
- Error models

Every optional field of a project item keeps two independent pieces of
state: whether it currently holds a value (``None`` means "not present")
and whether saving should write it back (the ``save_*`` flags).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterator, Optional


# =============================================================================
# Enumerations
# =============================================================================

class WhitespaceMode(IntEnum):
    """How whitespace differences are treated."""
    COMPARE = 0        # Whitespace is significant
    IGNORE_CHANGE = 1  # Ignore changes in amount of whitespace
    IGNORE_ALL = 2     # Ignore all whitespace

    @classmethod
    def from_value(cls, value: Optional[int]) -> Optional['WhitespaceMode']:
        """Create from a stored value, None when unknown."""
        try:
            return cls(value)
        except ValueError:
            return None


class ProjectCompareMethod(IntEnum):
    """Folder compare method stored in a project item."""
    CONTENT = 0
    QUICK_CONTENT = 1
    BINARY_CONTENT = 2
    DATE = 3
    DATE_SIZE = 4
    SIZE = 5

    @classmethod
    def from_value(cls, value: Optional[int]) -> Optional['ProjectCompareMethod']:
        """Create from a stored value, None when unknown."""
        try:
            return cls(value)
        except ValueError:
            return None


# Stored subfolders value when the project does not say
SUBFOLDERS_UNSET = -1

_LEADING_INT = re.compile(r'\s*([+-]?[0-9]+)')


def parse_leading_int(text: str) -> int:
    """
    Parse the integer at the start of ``text``.

    Leading whitespace and a sign are accepted, parsing stops at the first
    non-digit and text without leading digits yields 0.
    """
    match = _LEADING_INT.match(text)
    if match is None:
        return 0
    return int(match.group(1))


# =============================================================================
# Path Models
# =============================================================================

class PathContext:
    """
    Ordered set of compared locations.

    Left and right are normally present; middle is only present for
    three-way comparisons. Paths are stored as given, without validation.
    """

    def __init__(
        self,
        left: Optional[str] = None,
        middle: Optional[str] = None,
        right: Optional[str] = None
    ):
        self._left = left
        self._middle = middle
        self._right = right

    @property
    def left(self) -> Optional[str]:
        return self._left

    @left.setter
    def left(self, value: Optional[str]) -> None:
        self._left = value

    @property
    def middle(self) -> Optional[str]:
        return self._middle

    @middle.setter
    def middle(self, value: Optional[str]) -> None:
        self._middle = value

    @property
    def right(self) -> Optional[str]:
        return self._right

    @right.setter
    def right(self, value: Optional[str]) -> None:
        self._right = value

    def set_left(self, value: Optional[str]) -> None:
        self._left = value

    def set_middle(self, value: Optional[str]) -> None:
        self._middle = value

    def set_right(self, value: Optional[str]) -> None:
        self._right = value

    @property
    def is_three_way(self) -> bool:
        """Check if a middle path takes part in the comparison."""
        return bool(self._middle)

    @property
    def count(self) -> int:
        """Number of non-empty paths."""
        return sum(1 for _ in self)

    def copy(self) -> PathContext:
        return PathContext(self._left, self._middle, self._right)

    def __iter__(self) -> Iterator[str]:
        for path in (self._left, self._middle, self._right):
            if path:
                yield path

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PathContext):
            return NotImplemented
        return (self._left, self._middle, self._right) == (
            other._left, other._middle, other._right
        )

    def __repr__(self) -> str:
        return (
            f"PathContext(left={self._left!r}, middle={self._middle!r}, "
            f"right={self._right!r})"
        )


# =============================================================================
# Project Models
# =============================================================================

@dataclass(eq=False)
class ProjectItem:
    """
    One comparison definition of a project file.

    Value fields set to None are "not present". The ``save_*`` flags are
    application policy and decide whether saving writes the field back,
    independently of whether it holds a value.
    """
    paths: PathContext = field(default_factory=PathContext)

    # Per-side read-only state
    left_readonly: bool = False
    middle_readonly: bool = False
    right_readonly: bool = False

    # Folder compare setup
    filter: Optional[str] = None
    subfolders: int = SUBFOLDERS_UNSET
    has_subfolders: bool = False
    unpacker: Optional[str] = None
    prediffer: Optional[str] = None

    # Comparison options
    ignore_whitespace: Optional[int] = None
    ignore_blank_lines: Optional[bool] = None
    ignore_case: Optional[bool] = None
    ignore_eol: Optional[bool] = None
    ignore_numbers: Optional[bool] = None
    ignore_codepage: Optional[bool] = None
    filter_comment_lines: Optional[bool] = None
    compare_method: Optional[int] = None

    hidden_items: Optional[list[str]] = None

    # Persist policy
    save_filter: bool = True
    save_subfolders: bool = True
    save_unpacker: bool = True
    save_prediffer: bool = True
    save_ignore_whitespace: bool = True
    save_ignore_blank_lines: bool = True
    save_ignore_case: bool = True
    save_ignore_eol: bool = True
    save_ignore_numbers: bool = True
    save_ignore_codepage: bool = True
    save_filter_comment_lines: bool = True
    save_compare_method: bool = True
    save_hidden_items: bool = True

    # -------------------------------------------------------------------------
    # Presence
    # -------------------------------------------------------------------------

    @property
    def has_left(self) -> bool:
        return self.paths.left is not None

    @property
    def has_middle(self) -> bool:
        return self.paths.middle is not None

    @property
    def has_right(self) -> bool:
        return self.paths.right is not None

    @property
    def has_filter(self) -> bool:
        return self.filter is not None

    @property
    def has_unpacker(self) -> bool:
        return self.unpacker is not None

    @property
    def has_prediffer(self) -> bool:
        return self.prediffer is not None

    @property
    def has_ignore_whitespace(self) -> bool:
        return self.ignore_whitespace is not None

    @property
    def has_ignore_blank_lines(self) -> bool:
        return self.ignore_blank_lines is not None

    @property
    def has_ignore_case(self) -> bool:
        return self.ignore_case is not None

    @property
    def has_ignore_eol(self) -> bool:
        return self.ignore_eol is not None

    @property
    def has_ignore_numbers(self) -> bool:
        return self.ignore_numbers is not None

    @property
    def has_ignore_codepage(self) -> bool:
        return self.ignore_codepage is not None

    @property
    def has_filter_comment_lines(self) -> bool:
        return self.filter_comment_lines is not None

    @property
    def has_compare_method(self) -> bool:
        return self.compare_method is not None

    @property
    def has_hidden_items(self) -> bool:
        return self.hidden_items is not None

    # -------------------------------------------------------------------------
    # Path accessors
    # -------------------------------------------------------------------------

    def get_left(self) -> tuple[str, bool]:
        """Get left path and whether it is read-only."""
        return self.paths.left or "", self.left_readonly

    def set_left(self, path: str, read_only: Optional[bool] = None) -> None:
        """Set left path; the read-only flag only changes when given."""
        self.paths.left = path
        if read_only is not None:
            self.left_readonly = read_only

    def get_middle(self) -> tuple[str, bool]:
        """Get middle path and whether it is read-only."""
        return self.paths.middle or "", self.middle_readonly

    def set_middle(self, path: str, read_only: Optional[bool] = None) -> None:
        """Set middle path; the read-only flag only changes when given."""
        self.paths.middle = path
        if read_only is not None:
            self.middle_readonly = read_only

    def get_right(self) -> tuple[str, bool]:
        """Get right path and whether it is read-only."""
        return self.paths.right or "", self.right_readonly

    def set_right(self, path: str, read_only: Optional[bool] = None) -> None:
        """Set right path; the read-only flag only changes when given."""
        self.paths.right = path
        if read_only is not None:
            self.right_readonly = read_only

    def get_paths(self, recursive: bool = False) -> tuple[PathContext, bool]:
        """
        Get the compared paths and whether to recurse into subfolders.

        Args:
            recursive: Value returned when the item does not specify
                subfolders

        Returns:
            Tuple of (copy of the paths, recursive flag)
        """
        if self.has_subfolders:
            recursive = self.subfolders == 1
        return self.paths.copy(), recursive

    # -------------------------------------------------------------------------
    # Option helpers
    # -------------------------------------------------------------------------

    @property
    def whitespace_mode(self) -> Optional[WhitespaceMode]:
        return WhitespaceMode.from_value(self.ignore_whitespace)

    @property
    def method(self) -> Optional[ProjectCompareMethod]:
        return ProjectCompareMethod.from_value(self.compare_method)

    def set_subfolders(self, recursive: bool) -> None:
        self.subfolders = 1 if recursive else 0
        self.has_subfolders = True

    def add_hidden_item(self, name: str) -> None:
        if self.hidden_items is None:
            self.hidden_items = []
        self.hidden_items.append(name)


# =============================================================================
# Error Models
# =============================================================================

class ProjectFileError(Exception):
    """Failure reading or writing a project file."""

    def __init__(self, path: str, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message


class ProjectParseError(ProjectFileError):
    """Project file could not be read or is not well-formed XML."""

    def __init__(
        self,
        path: str,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None
    ):
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(path, message)
        self.line = line
        self.column = column


class ProjectWriteError(ProjectFileError):
    """Project file could not be written."""
