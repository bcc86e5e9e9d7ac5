import threading
import time
from pathlib import Path
from typing import List

from hoverdoc.archive import SwcArchive, SwcArchiveLoader


class SpyArchiveLoader(SwcArchiveLoader):
    """Records every archive it opens. `delay` widens first-access races in tests."""

    def __init__(self, delay: float = 0.0):
        self.delay = delay
        self.opened: List[Path] = []
        self._lock = threading.Lock()

    def open(self, path: Path) -> SwcArchive:
        with self._lock:
            self.opened.append(path)
        if self.delay:
            time.sleep(self.delay)
        return super().open(path)

    def open_count(self, path: Path) -> int:
        return sum(1 for p in self.opened if p == path)
