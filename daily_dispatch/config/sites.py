"""Site list storage - the newline-separated list of news sites to aggregate."""

import json
import os
import tempfile
from pathlib import Path
from typing import List, Union

import structlog

from .settings import settings

logger = structlog.get_logger()


def parse_sites(raw: str) -> List[str]:
    """Split a newline-separated site list, dropping blank lines."""
    if not raw:
        return []
    return [line.strip() for line in raw.splitlines() if line.strip()]


class SiteStore:
    """Reads and writes the configured site list.

    The list is kept as the raw string the client submitted, in a small JSON
    document: ``{"sites": "baltimoresun.com\\nexample.org"}``. When nothing
    has been saved yet, the ``DD_SITES`` setting is used.
    """

    def __init__(self, path: Union[str, Path] = None, default: str = None):
        self.path = Path(path) if path else settings.sites_file
        self.default = settings.sites if default is None else default

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("sites_file_unreadable", path=str(self.path), error=str(e))
            return {}
        return data if isinstance(data, dict) else {}

    def load(self) -> str:
        """Return the raw site list string."""
        sites = self._load().get("sites")
        if isinstance(sites, str):
            return sites
        return self.default

    def load_sites(self) -> List[str]:
        return parse_sites(self.load())

    def save(self, sites: str) -> None:
        """Save the site list atomically (write to temp, then rename)."""
        if not isinstance(sites, str):
            raise TypeError("sites must be a string")

        data = self._load()
        data["sites"] = sites

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_path = tempfile.mkstemp(dir=self.path.parent, suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(temp_path, self.path)
            logger.info("sites_saved", path=str(self.path), count=len(parse_sites(sites)))
        except Exception:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise
