"""Configuration - settings, curated feed table and the site list."""

from .settings import Settings, settings
from .feeds import KNOWN_FEEDS
from .sites import SiteStore, parse_sites

__all__ = ["Settings", "settings", "KNOWN_FEEDS", "SiteStore", "parse_sites"]
