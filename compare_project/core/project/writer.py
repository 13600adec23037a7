"""
Project file writer.

Serializes project items through a QXmlStreamWriter. Whether an element is
written depends on the item's persist flags and, for text fields, on the
value being non-empty; absent option values are written as their defaults.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from PyQt6.QtCore import QByteArray, QXmlStreamWriter

from compare_project.core.models import ProjectItem, ProjectWriteError
from compare_project.core.project import elements


def _flag(value) -> str:
    return "1" if value else "0"


class ProjectWriter:
    """Writes project items as an indented XML document."""

    def __init__(self, xml: QXmlStreamWriter):
        self._xml = xml
        self._xml.setAutoFormatting(True)

    def write_document(self, items: Iterable[ProjectItem]) -> None:
        self._xml.writeStartDocument()
        self._xml.writeStartElement(elements.ROOT)
        for item in items:
            self.write_item(item)
        self._xml.writeEndElement()
        self._xml.writeEndDocument()

    def write_item(self, item: ProjectItem) -> None:
        xml = self._xml
        paths = item.paths

        xml.writeStartElement(elements.PATHS)

        if paths.left:
            xml.writeTextElement(elements.LEFT, paths.left)
        if paths.middle:
            xml.writeTextElement(elements.MIDDLE, paths.middle)
        if paths.right:
            xml.writeTextElement(elements.RIGHT, paths.right)
        if item.save_filter and item.filter:
            xml.writeTextElement(elements.FILTER, item.filter)
        if item.save_subfolders:
            # Unset (-1) counts as enabled
            xml.writeTextElement(elements.SUBFOLDERS, _flag(item.subfolders != 0))

        xml.writeTextElement(elements.LEFT_READONLY, _flag(item.left_readonly))
        if paths.middle:
            xml.writeTextElement(elements.MIDDLE_READONLY, _flag(item.middle_readonly))
        xml.writeTextElement(elements.RIGHT_READONLY, _flag(item.right_readonly))

        if item.save_unpacker and item.unpacker:
            xml.writeTextElement(elements.UNPACKER, item.unpacker)
        # Prediffer is written whenever set; save_prediffer is not consulted
        if item.prediffer:
            xml.writeTextElement(elements.PREDIFFER, item.prediffer)

        if item.save_ignore_whitespace:
            xml.writeTextElement(elements.WHITE_SPACES, str(int(item.ignore_whitespace or 0)))
        if item.save_ignore_blank_lines:
            xml.writeTextElement(elements.IGNORE_BLANK_LINES, _flag(item.ignore_blank_lines))
        if item.save_ignore_case:
            xml.writeTextElement(elements.IGNORE_CASE, _flag(item.ignore_case))
        if item.save_ignore_eol:
            xml.writeTextElement(elements.IGNORE_CR_DIFF, _flag(item.ignore_eol))
        if item.save_ignore_numbers:
            xml.writeTextElement(elements.IGNORE_NUMBERS, _flag(item.ignore_numbers))
        if item.save_ignore_codepage:
            xml.writeTextElement(elements.IGNORE_CODEPAGE_DIFF, _flag(item.ignore_codepage))
        if item.save_filter_comment_lines:
            xml.writeTextElement(elements.IGNORE_COMMENT_DIFF, _flag(item.filter_comment_lines))
        if item.save_compare_method:
            xml.writeTextElement(elements.COMPARE_METHOD, str(int(item.compare_method or 0)))

        if item.save_hidden_items and item.hidden_items:
            xml.writeStartElement(elements.HIDDEN_LIST)
            for name in item.hidden_items:
                xml.writeTextElement(elements.HIDDEN_ITEM, name)
            xml.writeEndElement()

        xml.writeEndElement()


def serialize_project_items(items: Iterable[ProjectItem], path: Path | str = "") -> bytes:
    """
    Serialize items to a UTF-8 encoded project document.

    Raises:
        ProjectWriteError: Some text cannot be represented in XML; ``path``
            names the destination in the error
    """
    buffer = QByteArray()
    xml = QXmlStreamWriter(buffer)
    ProjectWriter(xml).write_document(items)
    if xml.hasError():
        raise ProjectWriteError(str(path), "Project data contains characters not allowed in XML")
    return buffer.data()


def write_project_items(path: Path | str, items: Iterable[ProjectItem]) -> int:
    """
    Write project items to a project file, replacing its contents.

    The file is truncated and written in place, so a failed write can leave
    a partial file behind. Text that XML cannot carry fails before the file
    is opened.

    Args:
        path: Destination path
        items: Items in the order they are written

    Returns:
        Number of bytes written

    Raises:
        ProjectWriteError: The items cannot be serialized or the destination
            cannot be opened or written
    """
    path = Path(path)
    data = serialize_project_items(items, path)

    try:
        with open(path, 'wb') as stream:
            stream.write(data)
    except OSError as e:
        raise ProjectWriteError(str(path), f"Could not write file: {e}") from e

    logging.debug(f"ProjectWriter - Wrote {len(data)} bytes to {path}")
    return len(data)
