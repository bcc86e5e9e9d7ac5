import logging
from pathlib import Path

from hoverdoc.archive import ArchiveMetadataIndex
from hoverdoc.asdoc import StructuredComment
from hoverdoc.spec import FailureKind, Lookup
from .bundled import BundledReferenceIndex
from .config import ResolverConfig

log = logging.getLogger(__name__)


def _normalize(archive_path: str) -> str:
    return archive_path.replace("\\", "/")


class FallbackLocator:
    """
    Finds documentation for symbols of SDK framework libraries whose archives
    carry none themselves.

    Sources are tried in order:
    1. the locale resource archive, `<frameworks>/locale/<locale>/<name>_rb.swc`
    2. the bundled reference document, for platform-global libraries only

    The next source is only consulted when the previous one has no
    documentation metadata at all. Metadata without the symbol, a malformed
    source or an unexpected SDK layout ends the chain.
    """

    def __init__(
        self,
        config: ResolverConfig,
        archive_index: ArchiveMetadataIndex,
        bundled_index: BundledReferenceIndex,
    ):
        self.config = config
        self.archive_index = archive_index
        self.bundled_index = bundled_index

    def is_framework_library(self, archive_path: str) -> bool:
        normalized = _normalize(archive_path)
        return any(sig in normalized for sig in self.config.library_path_signatures)

    def is_global_library(self, archive_path: str) -> bool:
        file_name = Path(_normalize(archive_path)).name
        return any(name in file_name for name in self.config.global_library_names)

    def locale_archive_path(self, archive_path: str) -> Lookup[Path]:
        path = Path(_normalize(archive_path))
        locale_name = f"{path.stem}{self.config.locale_archive_suffix}{path.suffix}"
        for ancestor in path.parents:
            if ancestor.name == self.config.frameworks_dir_name:
                return Lookup.hit(
                    ancestor
                    / self.config.locale_dir_name
                    / self.config.default_locale
                    / locale_name
                )
        return Lookup.miss(
            FailureKind.UNEXPECTED_LAYOUT,
            f"No '{self.config.frameworks_dir_name}' directory above {archive_path}",
        )

    def locate(self, archive_path: str, qualified_name: str) -> Lookup[StructuredComment]:
        if not self.is_framework_library(archive_path):
            return Lookup.miss(
                FailureKind.NOT_FOUND, f"{archive_path} is not a framework library"
            )

        locale_path = self.locale_archive_path(archive_path)
        if locale_path.value is None:
            log.warning("Unexpected SDK layout: %s", locale_path.detail)
            return Lookup.miss(FailureKind.UNEXPECTED_LAYOUT, locale_path.detail)

        if locale_path.value.is_file():
            result = self.archive_index.get(locale_path.value, qualified_name)
            if result.found or result.is_terminal:
                return result

        if self.is_global_library(archive_path):
            return self.bundled_index.get(qualified_name)

        return Lookup.miss(
            FailureKind.NOT_FOUND, f"No fallback documentation for {qualified_name}"
        )
