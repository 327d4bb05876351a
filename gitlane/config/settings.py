"""
Settings management for gitlane
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any

from gitlane.constants import (
    DEFAULT_BRANCH_COLORS,
    DEFAULT_BRANCH_SPACING,
    DEFAULT_COMMIT_SPACING,
    DEFAULT_NODE_RADIUS,
    DEFAULT_PAGE_SIZE,
    SETTINGS_FILE,
)
from gitlane.graph.geometry import GraphStyle
from gitlane.graph.types import LayoutOptions


class Settings:
    """Manages application settings"""

    DEFAULT_SETTINGS = {
        "graph": {
            "commit_spacing": DEFAULT_COMMIT_SPACING,
            "branch_spacing": DEFAULT_BRANCH_SPACING,
            "node_radius": DEFAULT_NODE_RADIUS,
            "branch_colors": list(DEFAULT_BRANCH_COLORS),
            "prefer_current_branch": False,  # Keep the checked-out branch on the leftmost lane
        },
        "history": {
            "page_size": DEFAULT_PAGE_SIZE,  # Commits fetched per page
        },
        "logging": {"level": "WARNING"},
    }

    def __init__(self, config_path: Path | None = None) -> None:
        """Initialize settings"""
        if config_path is None:
            config_path = Path.home() / SETTINGS_FILE

        self.config_path = config_path
        self.settings = copy.deepcopy(self.DEFAULT_SETTINGS)
        self.load()

    def load(self) -> None:
        """Load settings from file"""
        if self.config_path.exists():
            with open(self.config_path) as f:
                loaded = json.load(f)
                # Merge with defaults to handle new settings
                self._merge_settings(self.settings, loaded)

    def save(self) -> None:
        """Save settings to file"""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w") as f:
            json.dump(self.settings, f, indent=2)

    def _merge_settings(self, base: dict[str, Any], updates: dict[str, Any]) -> None:
        """Recursively merge settings dictionaries"""
        for key, value in updates.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                base_dict: dict[str, Any] = base[key]
                value_dict: dict[str, Any] = value
                self._merge_settings(base_dict, value_dict)
            else:
                base[key] = value

    def get(self, path: str, default: Any = None) -> Any:
        """Get a setting by dot-separated path (e.g., 'graph.node_radius')"""
        parts = path.split(".")
        value: Any = self.settings

        for part in parts:
            if isinstance(value, dict):
                value_dict: dict[str, Any] = value
                if part in value_dict:
                    value = value_dict[part]
                else:
                    return default
            else:
                return default

        return value

    def set(self, path: str, value: Any) -> None:
        """Set a setting by dot-separated path"""
        parts = path.split(".")
        target: Any = self.settings

        for part in parts[:-1]:
            if part not in target:
                target[part] = {}
            target = target[part]

        target[parts[-1]] = value

    def get_branch_colors(self) -> tuple[str, ...]:
        """Get the lane palette, falling back to the default for an empty list."""
        colors = self.get("graph.branch_colors", list(DEFAULT_BRANCH_COLORS))
        palette = tuple(str(color) for color in colors or ())
        return palette or DEFAULT_BRANCH_COLORS

    def get_graph_style(self) -> GraphStyle:
        """Get spacing and palette for the graph.

        Spacings are clamped to at least 1 pixel so a bad settings file
        cannot collapse the diagram.
        """
        return GraphStyle(
            commit_spacing=max(1, int(self.get("graph.commit_spacing", DEFAULT_COMMIT_SPACING))),
            branch_spacing=max(1, int(self.get("graph.branch_spacing", DEFAULT_BRANCH_SPACING))),
            node_radius=max(1, int(self.get("graph.node_radius", DEFAULT_NODE_RADIUS))),
            branch_colors=self.get_branch_colors(),
        )

    def get_layout_options(self, current_branch: str | None = None) -> LayoutOptions:
        """Get lane allocation options for the given checked-out branch."""
        return LayoutOptions(
            palette=self.get_branch_colors(),
            current_branch=current_branch,
            prefer_current_branch=bool(self.get("graph.prefer_current_branch", False)),
        )

    def get_page_size(self) -> int:
        """Get the number of commits fetched per history page."""
        page_size: int = int(self.get("history.page_size", DEFAULT_PAGE_SIZE))
        return max(1, page_size)  # At least 1

    def get_log_level(self) -> int:
        """Get the configured logging level, WARNING for unknown names."""
        name = str(self.get("logging.level", "WARNING")).upper()
        level = logging.getLevelName(name)
        return level if isinstance(level, int) else logging.WARNING
