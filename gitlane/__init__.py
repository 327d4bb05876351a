"""
gitlane - commit graph layout for a desktop Git client
"""

__version__ = "0.1.0"
