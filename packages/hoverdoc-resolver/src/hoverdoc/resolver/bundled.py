import logging
import threading
from pathlib import Path
from typing import Optional, Union

from hoverdoc.archive import (
    MetadataList,
    MetadataParseError,
    comment_lookup,
    parse_dita_document,
)
from hoverdoc.asdoc import StructuredComment
from hoverdoc.spec import FailureKind, Lookup
from .config import ResolverConfig

log = logging.getLogger(__name__)


def bundled_document_path(
    tool_location: Union[str, Path], config: ResolverConfig
) -> Lookup[Path]:
    """
    The bundled reference document ships two directory levels above the tool's
    own location: `<tool>/../../<bundled_docs_dir>/<bundled_docs_file>`.
    """
    try:
        location = Path(tool_location).resolve()
    except (OSError, RuntimeError, TypeError, ValueError) as e:
        return Lookup.miss(FailureKind.MALFORMED, f"Cannot resolve {tool_location!r}: {e}")

    if len(location.parents) < 2:
        return Lookup.miss(
            FailureKind.UNEXPECTED_LAYOUT, f"{location} has no install directory"
        )
    return Lookup.hit(
        location.parents[1] / config.bundled_docs_dir / config.bundled_docs_file
    )


def _sibling_reader(base_dir: Path):
    def read(href: str) -> Optional[bytes]:
        candidate = base_dir / href
        try:
            return candidate.read_bytes() if candidate.is_file() else None
        except OSError:
            return None

    return read


class BundledReferenceIndex:
    """
    Documentation for platform-global symbols, parsed from the reference document
    bundled with the tool.

    The document is read at most once. A missing or unreadable document is
    remembered for the lifetime of the index and never retried.
    """

    def __init__(self, tool_location: Union[str, Path], config: ResolverConfig):
        self._tool_location = tool_location
        self._config = config
        self._metadata: Lookup[MetadataList] = Lookup.miss(FailureKind.NOT_FOUND)
        self._loaded = False
        self._lock = threading.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def _load(self) -> Lookup[MetadataList]:
        location = bundled_document_path(self._tool_location, self._config)
        if location.value is None:
            return Lookup.miss(location.failure or FailureKind.NOT_FOUND, location.detail)

        path = location.value
        if not path.is_file():
            return Lookup.miss(FailureKind.NOT_FOUND, f"{path} does not exist")
        try:
            metadata = parse_dita_document(
                path.read_bytes(), read_ref=_sibling_reader(path.parent), source=str(path)
            )
        except FileNotFoundError as e:
            return Lookup.miss(FailureKind.NOT_FOUND, str(e))
        except (OSError, MetadataParseError) as e:
            return Lookup.miss(FailureKind.MALFORMED, str(e))
        return Lookup.hit(metadata)

    def get_metadata(self) -> Lookup[MetadataList]:
        if not self._loaded:
            with self._lock:
                if not self._loaded:
                    self._metadata = self._load()
                    self._loaded = True
                    if not self._metadata.found:
                        log.debug(
                            "Bundled reference unavailable (%s): %s",
                            self._metadata.failure,
                            self._metadata.detail,
                        )
        return self._metadata

    def get(self, qualified_name: str) -> Lookup[StructuredComment]:
        metadata = self.get_metadata()
        if metadata.value is None:
            return Lookup.miss(metadata.failure or FailureKind.NOT_FOUND, metadata.detail)

        return comment_lookup(metadata.value, qualified_name, "the bundled reference")
