"""
Centralized constants for gitlane.

Defaults that are shared between the layout engine, the settings layer
and the command line live here so they are easy to find and modify.
"""

# Lane palette, cycled by the number of lanes opened so far
DEFAULT_BRANCH_COLORS = (
    "#007acc",  # blue
    "#ff6b35",  # orange
    "#4caf50",  # green
    "#e91e63",  # pink
    "#9c27b0",  # violet
    "#00bcd4",  # teal
    "#f44336",  # red
    "#8bc34a",  # lime
    "#673ab7",  # grape
    "#03a9f4",  # cyan
    "#3f51b5",  # indigo
    "#ffeb3b",  # yellow
)

# Graph geometry defaults (pixels)
DEFAULT_COMMIT_SPACING = 32
DEFAULT_BRANCH_SPACING = 12
DEFAULT_NODE_RADIUS = 2

# Height reserved below the last row for the commit details strip
COMMIT_DETAILS_HEIGHT = 64

# History pagination
DEFAULT_PAGE_SIZE = 50

# Settings file location, relative to the user's home directory
SETTINGS_FILE = ".config/gitlane/settings.json"
