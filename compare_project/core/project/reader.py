"""
Project file reader.

Rebuilds project items from the start/end/text events of a
QXmlStreamReader without building a document tree. The format is a flat
nesting of root, paths and field elements; hidden items sit one level deeper
under their list element. A small state machine tracks where the reader is:

    AWAITING_ROOT -> AWAITING_PATHS -> IN_PATHS -> IN_FIELD
                                               -> IN_HIDDEN_LIST -> IN_HIDDEN_ITEM

Anything else opens a SKIPPING state whose text is ignored. States are
pushed on element start and popped on element end, so unknown elements at
any depth are skipped without disturbing their siblings. A paths element
only starts a new item directly under the root; one nested inside another
element is skipped with everything it contains.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from pathlib import Path
from typing import Optional

from PyQt6.QtCore import QXmlStreamReader

from compare_project.core.models import (
    ProjectItem,
    ProjectParseError,
    parse_leading_int,
)
from compare_project.core.project import elements


class ReaderState(Enum):
    """Position of the reader in the project document."""
    AWAITING_ROOT = auto()   # Before the root element
    AWAITING_PATHS = auto()  # Inside the root element
    IN_PATHS = auto()        # Inside a paths element, between fields
    IN_FIELD = auto()        # Inside a field element of a paths element
    IN_HIDDEN_LIST = auto()  # Inside a hidden-list element
    IN_HIDDEN_ITEM = auto()  # Inside a hidden-item element
    SKIPPING = auto()        # Inside an element that is not recognized


_PATH_FIELDS = {
    elements.LEFT: 'left',
    elements.MIDDLE: 'middle',
    elements.RIGHT: 'right',
}

_TEXT_FIELDS = {
    elements.FILTER: 'filter',
    elements.UNPACKER: 'unpacker',
    elements.PREDIFFER: 'prediffer',
}

_INT_FIELDS = {
    elements.WHITE_SPACES: 'ignore_whitespace',
    elements.COMPARE_METHOD: 'compare_method',
}

_BOOL_FIELDS = {
    elements.LEFT_READONLY: 'left_readonly',
    elements.MIDDLE_READONLY: 'middle_readonly',
    elements.RIGHT_READONLY: 'right_readonly',
    elements.IGNORE_BLANK_LINES: 'ignore_blank_lines',
    elements.IGNORE_CASE: 'ignore_case',
    elements.IGNORE_CR_DIFF: 'ignore_eol',
    elements.IGNORE_NUMBERS: 'ignore_numbers',
    elements.IGNORE_CODEPAGE_DIFF: 'ignore_codepage',
    elements.IGNORE_COMMENT_DIFF: 'filter_comment_lines',
}


class ProjectReader:
    """
    Event handler building the item sequence of one project document.

    Feed it element and text events, either directly through
    start_element/end_element/characters or from a QXmlStreamReader
    through feed(). Each instance reads one document.
    """

    def __init__(self):
        self.items: list[ProjectItem] = []
        self._state = ReaderState.AWAITING_ROOT
        self._saved: list[tuple[ReaderState, str]] = []
        self._field = ""
        self._text = ""
        self._hidden_item_started = False

    @property
    def state(self) -> ReaderState:
        return self._state

    @property
    def depth(self) -> int:
        """Number of currently open elements."""
        return len(self._saved)

    @property
    def current_item(self) -> Optional[ProjectItem]:
        return self.items[-1] if self.items else None

    # -------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------

    def start_element(self, name: str) -> None:
        """Handle an element start tag."""
        self._saved.append((self._state, self._field))
        state = self._state

        if state == ReaderState.AWAITING_ROOT:
            self._state = ReaderState.AWAITING_PATHS
        elif state == ReaderState.AWAITING_PATHS:
            if name == elements.PATHS:
                self.items.append(ProjectItem())
                self._state = ReaderState.IN_PATHS
            else:
                self._state = ReaderState.SKIPPING
        elif state == ReaderState.IN_PATHS:
            if name == elements.HIDDEN_LIST:
                self._state = ReaderState.IN_HIDDEN_LIST
            elif name == elements.HIDDEN_ITEM:
                self._enter_hidden_item()
            else:
                self._state = ReaderState.IN_FIELD
                self._field = name
                self._text = ""
        elif state == ReaderState.IN_HIDDEN_LIST and name == elements.HIDDEN_ITEM:
            self._enter_hidden_item()
        else:
            self._state = ReaderState.SKIPPING

    def end_element(self) -> None:
        """Handle an element end tag."""
        if not self._saved:
            return
        self._state, self._field = self._saved.pop()

    def characters(self, text: str) -> None:
        """Handle a chunk of element text."""
        item = self.current_item
        if item is None:
            return

        if self._state == ReaderState.IN_FIELD:
            self._text += text
            self._apply_field(item, self._field, text)
        elif self._state == ReaderState.IN_HIDDEN_ITEM:
            if self._hidden_item_started:
                item.hidden_items[-1] += text
            else:
                item.add_hidden_item(text)
                self._hidden_item_started = True

    def feed(self, xml: QXmlStreamReader) -> None:
        """
        Drive the handler from a stream reader until the document ends.

        Stops at the first error; the caller checks ``xml.hasError()``.
        """
        while not xml.atEnd():
            token = xml.readNext()
            if token == QXmlStreamReader.TokenType.StartElement:
                self.start_element(xml.name())
            elif token == QXmlStreamReader.TokenType.EndElement:
                self.end_element()
            elif token == QXmlStreamReader.TokenType.Characters:
                self.characters(xml.text())

    # -------------------------------------------------------------------------
    # Field updates
    # -------------------------------------------------------------------------

    def _enter_hidden_item(self) -> None:
        self._state = ReaderState.IN_HIDDEN_ITEM
        self._hidden_item_started = False

    def _apply_field(self, item: ProjectItem, name: str, chunk: str) -> None:
        """Update the item field named by ``name`` from new element text."""
        if name in _PATH_FIELDS:
            attr = _PATH_FIELDS[name]
            setattr(item.paths, attr, (getattr(item.paths, attr) or "") + chunk)
        elif name in _TEXT_FIELDS:
            attr = _TEXT_FIELDS[name]
            setattr(item, attr, (getattr(item, attr) or "") + chunk)
        elif name == elements.SUBFOLDERS:
            item.subfolders = parse_leading_int(self._text)
            item.has_subfolders = True
        elif name in _INT_FIELDS:
            setattr(item, _INT_FIELDS[name], parse_leading_int(self._text))
        elif name in _BOOL_FIELDS:
            setattr(item, _BOOL_FIELDS[name], parse_leading_int(self._text) != 0)


def read_project_items(path: Path | str) -> list[ProjectItem]:
    """
    Read all project items from a project file.

    Args:
        path: Path to the project file

    Returns:
        Items in document order

    Raises:
        ProjectParseError: The file cannot be read or is not well-formed XML
    """
    path = Path(path)

    try:
        with open(path, 'rb') as stream:
            data = stream.read()
    except OSError as e:
        raise ProjectParseError(str(path), f"Could not read file: {e}") from e

    xml = QXmlStreamReader(data)
    handler = ProjectReader()
    handler.feed(xml)

    if xml.hasError():
        raise ProjectParseError(
            str(path),
            xml.errorString(),
            line=xml.lineNumber(),
            column=xml.columnNumber()
        )

    logging.debug(f"ProjectReader - Read {len(handler.items)} item(s) from {path}")
    return handler.items
