import logging
import os
import threading
from pathlib import Path
from typing import Dict, Optional, Union

from hoverdoc.asdoc import StructuredComment
from hoverdoc.spec import (
    ArchiveLoaderProtocol,
    ArchiveProtocol,
    FailureKind,
    Lookup,
    MetadataListProtocol,
)
from .exceptions import ArchiveError, MetadataParseError

log = logging.getLogger(__name__)


class _ArchiveEntry:
    """
    The cached state of one archive path. `load` runs at most once; concurrent
    callers for the same path block on the entry lock until it has finished.
    """

    def __init__(self, path: Path):
        self.path = path
        self.archive: Optional[ArchiveProtocol] = None
        self.metadata: Lookup[MetadataListProtocol] = Lookup.miss(FailureKind.NOT_FOUND)
        self._loaded = False
        self._lock = threading.Lock()

    def ensure_loaded(self, loader: ArchiveLoaderProtocol) -> Lookup[MetadataListProtocol]:
        if self._loaded:
            return self.metadata
        with self._lock:
            if not self._loaded:
                self.metadata = self._load(loader)
                self._loaded = True
        return self.metadata

    def _load(self, loader: ArchiveLoaderProtocol) -> Lookup[MetadataListProtocol]:
        if not self.path.is_file():
            return Lookup.miss(FailureKind.NOT_FOUND, f"{self.path} does not exist")
        try:
            self.archive = loader.open(self.path)
            metadata = self.archive.get_metadata_list()
        except (ArchiveError, MetadataParseError) as e:
            log.debug("Ignoring documentation in %s: %s", self.path, e)
            return Lookup.miss(FailureKind.MALFORMED, str(e))
        except Exception as e:
            # Host-supplied loaders are not bound to the archive exceptions.
            log.debug("Loader failed on %s", self.path, exc_info=True)
            return Lookup.miss(FailureKind.MALFORMED, f"{type(e).__name__}: {e}")

        if metadata is None:
            return Lookup.miss(
                FailureKind.NOT_FOUND, f"{self.path.name} has no documentation metadata"
            )
        return Lookup.hit(metadata)


class ArchiveMetadataIndex:
    """
    Lazily opens library archives and looks symbols up in their documentation
    metadata.

    Each archive path is opened and parsed at most once, including when the
    archive turns out to have no metadata or to be unreadable. The cache lives
    as long as the index; the host calls `invalidate` when it replaces an
    archive on disk.
    """

    def __init__(self, loader: ArchiveLoaderProtocol):
        self._loader = loader
        self._entries: Dict[str, _ArchiveEntry] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _key(archive_path: Union[str, Path]) -> str:
        return os.path.abspath(os.fspath(archive_path))

    def _entry_for(self, archive_path: Union[str, Path]) -> _ArchiveEntry:
        key = self._key(archive_path)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                entry = _ArchiveEntry(Path(key))
                self._entries[key] = entry
        return entry

    def get_metadata(self, archive_path: Union[str, Path]) -> Lookup[MetadataListProtocol]:
        return self._entry_for(archive_path).ensure_loaded(self._loader)

    def get(
        self, archive_path: Union[str, Path], qualified_name: str
    ) -> Lookup[StructuredComment]:
        """
        Returns a fresh, uncompiled comment for `qualified_name` from the archive's
        metadata. Entries for symbols the host no longer knows are simply never
        asked for.
        """
        metadata = self.get_metadata(archive_path)
        if metadata.value is None:
            return Lookup.miss(metadata.failure or FailureKind.NOT_FOUND, metadata.detail)
        return comment_lookup(metadata.value, qualified_name, str(archive_path))

    def invalidate(self, archive_path: Union[str, Path]) -> None:
        with self._lock:
            self._entries.pop(self._key(archive_path), None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, archive_path: object) -> bool:
        if not isinstance(archive_path, (str, Path)):
            return False
        with self._lock:
            return self._key(archive_path) in self._entries


def comment_lookup(
    metadata: MetadataListProtocol, qualified_name: str, source: str
) -> Lookup[StructuredComment]:
    """
    Looks `qualified_name` up in a loaded metadata list. A list without the
    symbol yields UNDOCUMENTED, and an error raised by the list yields MALFORMED.
    """
    try:
        text = metadata.get_comment_text(qualified_name)
    except Exception as e:
        log.debug("Reading %s from %s failed", qualified_name, source, exc_info=True)
        return Lookup.miss(FailureKind.MALFORMED, f"{type(e).__name__}: {e}")

    if text is None:
        return Lookup.miss(
            FailureKind.UNDOCUMENTED, f"{qualified_name} is not documented in {source}"
        )
    return Lookup.hit(StructuredComment(text))
