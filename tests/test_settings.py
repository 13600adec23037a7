import json

from compare_project.core.models import ProjectItem
from compare_project.services.settings import (
    ProjectSaveOptions,
    ProjectSettings,
    SettingsManager,
)


def test_defaults_when_missing(tmp_path):
    manager = SettingsManager(tmp_path / "settings.json")
    settings = manager.settings
    assert settings.save_options == ProjectSaveOptions()
    assert settings.recent_projects == []


def test_save_and_load(tmp_path):
    path = tmp_path / "cfg" / "settings.json"
    manager = SettingsManager(path)
    settings = ProjectSettings(
        save_options=ProjectSaveOptions(save_filter=False, save_hidden_items=False),
        recent_projects=["/a.WinMerge"],
        last_directory="/",
    )
    assert manager.save(settings)

    loaded = SettingsManager(path).load()
    assert loaded.save_options.save_filter is False
    assert loaded.save_options.save_hidden_items is False
    assert loaded.save_options.save_compare_options is True
    assert loaded.recent_projects == ["/a.WinMerge"]


def test_corrupt_file_falls_back_to_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding='utf-8')
    assert SettingsManager(path).load() == ProjectSettings()


def test_partial_file_uses_defaults_for_missing_keys(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"save_options": {"save_unpacker": False}}), encoding='utf-8')
    settings = SettingsManager(path).load()
    assert settings.save_options.save_unpacker is False
    assert settings.save_options.save_filter is True
    assert settings.recent_projects_limit == 10


def test_recent_projects(tmp_path):
    manager = SettingsManager(tmp_path / "settings.json")
    manager.settings.recent_projects_limit = 2
    manager.add_recent_project("/p/one.WinMerge")
    manager.add_recent_project("/p/two.WinMerge")
    manager.add_recent_project("/p/one.WinMerge")
    manager.add_recent_project("/q/three.WinMerge")
    assert manager.settings.recent_projects == ["/q/three.WinMerge", "/p/one.WinMerge"]
    assert manager.settings.last_directory == "/q"

    reloaded = SettingsManager(tmp_path / "settings.json").load()
    assert reloaded.recent_projects == ["/q/three.WinMerge", "/p/one.WinMerge"]


def test_reset(tmp_path):
    manager = SettingsManager(tmp_path / "settings.json")
    manager.add_recent_project("/p/one.WinMerge")
    assert manager.reset() == ProjectSettings()
    assert SettingsManager(tmp_path / "settings.json").load().recent_projects == []


def test_save_options_apply():
    item = ProjectItem()
    ProjectSaveOptions(save_subfolders=False, save_compare_options=False).apply(item)
    assert not item.save_subfolders
    assert not item.save_ignore_whitespace
    assert not item.save_filter_comment_lines
    assert not item.save_compare_method
    assert item.save_filter
    assert item.save_unpacker
    assert item.save_hidden_items
