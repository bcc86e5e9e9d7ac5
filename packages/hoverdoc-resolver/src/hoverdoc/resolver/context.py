import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from hoverdoc.archive import ArchiveMetadataIndex, SwcArchiveLoader
from hoverdoc.spec import ArchiveLoaderProtocol
from .bundled import BundledReferenceIndex
from .config import ResolverConfig
from .locator import FallbackLocator


@dataclass
class ResolverContext:
    """
    Owns the caches shared by every resolution.

    Create one per process (or per workspace) and pass it to the engine. The
    caches are filled on first use and are never torn down while the context
    is alive.
    """

    config: ResolverConfig
    archive_index: ArchiveMetadataIndex
    bundled_index: BundledReferenceIndex
    locator: FallbackLocator


def create_resolver_context(
    config: Optional[ResolverConfig] = None,
    loader: Optional[ArchiveLoaderProtocol] = None,
    tool_location: Optional[Union[str, Path]] = None,
) -> ResolverContext:
    """
    Factory function to create a ResolverContext with the default collaborators.

    Args:
        config: Resolver settings; defaults to `ResolverConfig()`.
        loader: Opens library archives; defaults to `SwcArchiveLoader()`.
        tool_location: The host tool's executable or entry module. The bundled
                       reference document is looked up relative to it.
    """
    effective_config = config or ResolverConfig()
    archive_index = ArchiveMetadataIndex(loader or SwcArchiveLoader())
    bundled_index = BundledReferenceIndex(
        tool_location if tool_location is not None else sys.argv[0],
        effective_config,
    )
    locator = FallbackLocator(effective_config, archive_index, bundled_index)
    return ResolverContext(
        config=effective_config,
        archive_index=archive_index,
        bundled_index=bundled_index,
        locator=locator,
    )
