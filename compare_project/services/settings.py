"""
Application settings management.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Optional

from compare_project.core.models import ProjectItem


@dataclass
class ProjectSaveOptions:
    """Which fields new project items write back when saved."""
    save_filter: bool = True
    save_subfolders: bool = True
    save_unpacker: bool = True
    save_compare_options: bool = True
    save_hidden_items: bool = True

    def apply(self, item: ProjectItem) -> None:
        """Stamp this policy onto the persist flags of an item."""
        item.save_filter = self.save_filter
        item.save_subfolders = self.save_subfolders
        item.save_unpacker = self.save_unpacker
        item.save_prediffer = self.save_unpacker
        item.save_ignore_whitespace = self.save_compare_options
        item.save_ignore_blank_lines = self.save_compare_options
        item.save_ignore_case = self.save_compare_options
        item.save_ignore_eol = self.save_compare_options
        item.save_ignore_numbers = self.save_compare_options
        item.save_ignore_codepage = self.save_compare_options
        item.save_filter_comment_lines = self.save_compare_options
        item.save_compare_method = self.save_compare_options
        item.save_hidden_items = self.save_hidden_items


@dataclass
class ProjectSettings:
    """Main settings container."""
    save_options: ProjectSaveOptions = field(default_factory=ProjectSaveOptions)

    recent_projects: list[str] = field(default_factory=list)
    recent_projects_limit: int = 10
    last_directory: str = ""


class SettingsManager:
    """Manager for loading/saving settings."""

    def __init__(self, settings_path: Optional[Path] = None):
        self.settings_path = settings_path or self._get_default_path()
        self._settings: Optional[ProjectSettings] = None

    @staticmethod
    def _get_default_path() -> Path:
        """Get the default settings file path."""
        if os.name == 'nt':
            # Windows
            app_data = os.environ.get('APPDATA', os.path.expanduser('~'))
            return Path(app_data) / 'CompareProject' / 'settings.json'
        else:
            # Linux/Mac
            config_home = os.environ.get('XDG_CONFIG_HOME',
                                         os.path.expanduser('~/.config'))
            return Path(config_home) / 'compare-project' / 'settings.json'

    @property
    def settings(self) -> ProjectSettings:
        """Get current settings, loading from disk if needed."""
        if self._settings is None:
            self._settings = self.load()
        return self._settings

    def load(self) -> ProjectSettings:
        """Load settings from disk, falling back to defaults."""
        if not self.settings_path.exists():
            return ProjectSettings()

        try:
            with open(self.settings_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return self._from_dict(data)
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logging.warning(f"SettingsManager - Using defaults, could not load {self.settings_path}: {e}")
            return ProjectSettings()

    def save(self, settings: Optional[ProjectSettings] = None) -> bool:
        """Save settings to disk."""
        settings = settings or self._settings
        if settings is None:
            return False

        try:
            self.settings_path.parent.mkdir(parents=True, exist_ok=True)

            data = self._to_dict(settings)

            with open(self.settings_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)

            self._settings = settings
            return True

        except OSError as e:
            logging.error(f"SettingsManager - Failed to save {self.settings_path}: {e}")
            return False

    def reset(self) -> ProjectSettings:
        """Reset to default settings."""
        self._settings = ProjectSettings()
        self.save()
        return self._settings

    def add_recent_project(self, path: str) -> None:
        """Add a project to the recent projects list."""
        settings = self.settings
        recent = settings.recent_projects

        # Remove if already exists
        if path in recent:
            recent.remove(path)

        # Add to front
        recent.insert(0, path)

        # Trim to limit
        settings.recent_projects = recent[:settings.recent_projects_limit]
        settings.last_directory = str(Path(path).parent)

        self.save()

    def _to_dict(self, settings: ProjectSettings) -> dict:
        """Convert settings to dictionary for JSON serialization."""
        return asdict(settings)

    def _from_dict(self, data: dict) -> ProjectSettings:
        """Convert dictionary back to settings objects."""
        defaults = ProjectSaveOptions()
        options_data: dict[str, Any] = data.get('save_options', {})

        save_options = ProjectSaveOptions(
            save_filter=options_data.get('save_filter', defaults.save_filter),
            save_subfolders=options_data.get('save_subfolders', defaults.save_subfolders),
            save_unpacker=options_data.get('save_unpacker', defaults.save_unpacker),
            save_compare_options=options_data.get('save_compare_options', defaults.save_compare_options),
            save_hidden_items=options_data.get('save_hidden_items', defaults.save_hidden_items),
        )

        return ProjectSettings(
            save_options=save_options,
            recent_projects=data.get('recent_projects', []),
            recent_projects_limit=data.get('recent_projects_limit', 10),
            last_directory=data.get('last_directory', ''),
        )
