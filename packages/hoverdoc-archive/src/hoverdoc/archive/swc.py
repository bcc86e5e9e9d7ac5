import zipfile
import zlib
from pathlib import Path
from typing import Dict, Optional

from hoverdoc.spec import ArchiveLoaderProtocol, ArchiveProtocol
from .dita import MetadataList, parse_dita_document
from .exceptions import ArchiveError

DOCS_DIR = "docs/"
PACKAGES_DITA = "packages.dita"


class SwcArchive(ArchiveProtocol):
    """
    An opened SWC library. Only the `docs/` entries are kept; the zip file
    itself is closed as soon as they have been read.
    """

    def __init__(self, path: Path, doc_entries: Dict[str, bytes]):
        self._path = path
        self._doc_entries = doc_entries

    @property
    def path(self) -> Path:
        return self._path

    @property
    def file_name(self) -> str:
        return self._path.name

    def get_metadata_list(self) -> Optional[MetadataList]:
        data = self._doc_entries.get(PACKAGES_DITA)
        if data is None:
            return None
        return parse_dita_document(
            data,
            read_ref=self._doc_entries.get,
            source=f"{self.file_name}!{DOCS_DIR}{PACKAGES_DITA}",
        )


class SwcArchiveLoader(ArchiveLoaderProtocol):
    def open(self, path: Path) -> SwcArchive:
        try:
            with zipfile.ZipFile(path) as zf:
                doc_entries = {
                    name[len(DOCS_DIR):]: zf.read(name)
                    for name in zf.namelist()
                    if name.startswith(DOCS_DIR) and not name.endswith("/")
                }
        except (zipfile.BadZipFile, zlib.error, RuntimeError, OSError) as e:
            raise ArchiveError(f"Cannot read archive {path}: {e}") from e
        return SwcArchive(path, doc_entries)
