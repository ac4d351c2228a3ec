# src/goal_planner/storage/file_slot.py

from __future__ import annotations

import contextlib
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class FileSlot:
    """
    Key-value slot backed by one local file.

    Writes go to a sibling temp file first and are moved into place with
    os.replace, so readers never see a half-written slot.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> str | None:
        try:
            return self._path.read_text("utf-8")
        except FileNotFoundError:
            return None

    def write(self, text: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            tmp.write_text(text, "utf-8")
            os.replace(tmp, self._path)
        except OSError:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise
        with contextlib.suppress(OSError):
            # Goals may be personal; keep the file private on disk.
            os.chmod(self._path, 0o600)
        logger.debug("FileSlot wrote %d chars to %s", len(text), self._path)
