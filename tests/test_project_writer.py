import xml.etree.ElementTree as ET

import pytest

from compare_project.core.models import (
    PathContext,
    ProjectCompareMethod,
    ProjectItem,
    ProjectWriteError,
    WhitespaceMode,
)
from compare_project.core.project import serialize_project_items, write_project_items


def fields_of(data):
    """Return [(tag, text)] of the field elements of each paths element."""
    root = ET.fromstring(data)
    assert root.tag == "project"
    return [[(child.tag, child.text) for child in paths] for paths in root]


def two_way_item():
    item = ProjectItem(paths=PathContext(left="/a", right="/b"))
    item.ignore_case = True
    return item


def test_declaration_and_root():
    data = serialize_project_items([])
    assert data.startswith(b'<?xml version="1.0" encoding="UTF-8"?>')
    assert fields_of(data) == []


def test_two_way_item_with_default_flags():
    data = serialize_project_items([two_way_item()])
    assert fields_of(data) == [[
        ("left", "/a"),
        ("right", "/b"),
        ("subfolders", "1"),
        ("left-readonly", "0"),
        ("right-readonly", "0"),
        ("white-spaces", "0"),
        ("ignore-blank-lines", "0"),
        ("ignore-case", "1"),
        ("ignore-carriage-return-diff", "0"),
        ("ignore-numbers", "0"),
        ("ignore-codepage-diff", "0"),
        ("ignore-comment-diff", "0"),
        ("compare-method", "0"),
    ]]


def test_options_gated_only_by_persist_flags():
    item = two_way_item()
    for name in (
        'save_subfolders', 'save_ignore_whitespace', 'save_ignore_blank_lines',
        'save_ignore_eol', 'save_ignore_numbers', 'save_ignore_codepage',
        'save_filter_comment_lines', 'save_compare_method',
    ):
        setattr(item, name, False)
    data = serialize_project_items([item])
    assert fields_of(data) == [[
        ("left", "/a"),
        ("right", "/b"),
        ("left-readonly", "0"),
        ("right-readonly", "0"),
        ("ignore-case", "1"),
    ]]


def test_three_way_item_writes_middle_and_its_readonly():
    item = ProjectItem(paths=PathContext("/l", "/m", "/r"))
    item.middle_readonly = True
    item.right_readonly = True
    tags = dict(fields_of(serialize_project_items([item]))[0])
    assert tags["middle"] == "/m"
    assert tags["middle-readonly"] == "1"
    assert tags["right-readonly"] == "1"

    order = [tag for tag, _ in fields_of(serialize_project_items([item]))[0]]
    assert order[:3] == ["left", "middle", "right"]
    assert order.index("left-readonly") < order.index("middle-readonly") < order.index("right-readonly")


def test_empty_paths_are_not_written():
    item = ProjectItem(paths=PathContext(left="/a", middle="", right=""))
    item.middle_readonly = True
    tags = [tag for tag, _ in fields_of(serialize_project_items([item]))[0]]
    assert "middle" not in tags
    assert "right" not in tags
    assert "middle-readonly" not in tags
    assert "left-readonly" in tags
    assert "right-readonly" in tags


@pytest.mark.parametrize("stored, written", [(-1, "1"), (0, "0"), (1, "1"), (5, "1")])
def test_subfolders_written_as_flag(stored, written):
    item = two_way_item()
    item.subfolders = stored
    tags = dict(fields_of(serialize_project_items([item]))[0])
    assert tags["subfolders"] == written


def test_filter_and_unpacker_need_flag_and_value():
    item = two_way_item()
    item.filter = "*.txt"
    item.unpacker = "Zip"
    tags = dict(fields_of(serialize_project_items([item]))[0])
    assert tags["filter"] == "*.txt"
    assert tags["unpacker"] == "Zip"

    item.save_filter = False
    item.save_unpacker = False
    tags = dict(fields_of(serialize_project_items([item]))[0])
    assert "filter" not in tags
    assert "unpacker" not in tags

    item.save_filter = True
    item.filter = ""
    tags = dict(fields_of(serialize_project_items([item]))[0])
    assert "filter" not in tags


def test_prediffer_ignores_persist_flag():
    item = two_way_item()
    item.prediffer = "IgnoreHeader"
    item.save_prediffer = False
    tags = dict(fields_of(serialize_project_items([item]))[0])
    assert tags["prediffer"] == "IgnoreHeader"


def test_hidden_items_in_order():
    item = two_way_item()
    item.hidden_items = ["b", "a", "c"]
    root = ET.fromstring(serialize_project_items([item]))
    hidden = root.find("paths/hidden-list")
    assert [child.tag for child in hidden] == ["hidden-item"] * 3
    assert [child.text for child in hidden] == ["b", "a", "c"]
    assert list(root.find("paths"))[-1].tag == "hidden-list"


def test_hidden_items_skipped_when_empty_or_not_saved():
    item = two_way_item()
    item.hidden_items = []
    assert ET.fromstring(serialize_project_items([item])).find("paths/hidden-list") is None

    item.hidden_items = ["x"]
    item.save_hidden_items = False
    assert ET.fromstring(serialize_project_items([item])).find("paths/hidden-list") is None


def test_text_is_escaped():
    item = ProjectItem(paths=PathContext(left="a & b", right="<right>"))
    tags = dict(fields_of(serialize_project_items([item]))[0])
    assert tags["left"] == "a & b"
    assert tags["right"] == "<right>"


def test_items_written_in_order(tmp_path):
    items = [ProjectItem(paths=PathContext(left=f"/{n}", right="/r")) for n in range(3)]
    path = tmp_path / "order.WinMerge"
    written = write_project_items(path, items)
    assert written == path.stat().st_size
    lefts = [dict(fields)["left"] for fields in fields_of(path.read_bytes())]
    assert lefts == ["/0", "/1", "/2"]


def test_write_truncates_existing_file(tmp_path):
    path = tmp_path / "p.WinMerge"
    path.write_text("x" * 10000, encoding='utf-8')
    write_project_items(path, [])
    assert fields_of(path.read_bytes()) == []


def test_unwritable_destination_raises(tmp_path):
    path = tmp_path / "missing-dir" / "p.WinMerge"
    with pytest.raises(ProjectWriteError) as info:
        write_project_items(path, [two_way_item()])
    assert info.value.path == str(path)


def test_enum_option_values_written_as_numbers():
    item = two_way_item()
    item.ignore_whitespace = WhitespaceMode.IGNORE_ALL
    item.compare_method = ProjectCompareMethod.DATE_SIZE
    tags = dict(fields_of(serialize_project_items([item]))[0])
    assert tags["white-spaces"] == "2"
    assert tags["compare-method"] == "4"


def test_character_not_allowed_in_xml_fails_without_touching_file(tmp_path):
    path = tmp_path / "p.WinMerge"
    path.write_text("previous", encoding='utf-8')
    item = ProjectItem(paths=PathContext(left="/a\x01", right="/b"))
    with pytest.raises(ProjectWriteError) as info:
        write_project_items(path, [item])
    assert info.value.path == str(path)
    assert path.read_text(encoding='utf-8') == "previous"
