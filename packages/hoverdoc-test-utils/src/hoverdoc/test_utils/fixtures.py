import pytest
from typing import TYPE_CHECKING
from pathlib import Path

if TYPE_CHECKING:
    from .sdk import SdkFactory
    from .archive import SpyArchiveLoader


@pytest.fixture
def sdk_factory(tmp_path: Path) -> "SdkFactory":
    """Provides a factory to create isolated SDK directory trees."""
    # Lazy import so hoverdoc is not imported during pytest collection.
    from .sdk import SdkFactory

    return SdkFactory(tmp_path)


@pytest.fixture
def spy_loader() -> "SpyArchiveLoader":
    from .archive import SpyArchiveLoader

    return SpyArchiveLoader()
