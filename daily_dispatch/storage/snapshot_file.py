"""Best-effort on-disk copy of the last published snapshot."""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

import structlog

from ..ingestion.interfaces import CacheSnapshot

logger = structlog.get_logger()


class SnapshotFile:
    """JSON file holding the most recent CacheSnapshot.

    Used only so a restarted process has something to serve before its first
    pass finishes. Read and write failures are logged and otherwise ignored.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> Optional[CacheSnapshot]:
        if not self.path.exists():
            return None
        try:
            with open(self.path, encoding="utf-8") as f:
                snapshot = CacheSnapshot.from_dict(json.load(f))
        except Exception as e:
            logger.warning("snapshot_load_failed", path=str(self.path), error=str(e))
            return None
        logger.info("snapshot_loaded", path=str(self.path), items=len(snapshot.items))
        return snapshot

    def save(self, snapshot: CacheSnapshot) -> bool:
        """Write atomically (temp file, then rename). Returns False on failure."""
        temp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_path = tempfile.mkstemp(dir=self.path.parent, suffix=".json")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(snapshot.to_dict(), f)
            os.replace(temp_path, self.path)
        except Exception as e:
            logger.warning("snapshot_save_failed", path=str(self.path), error=str(e))
            if temp_path and os.path.exists(temp_path):
                os.unlink(temp_path)
            return False
        return True
