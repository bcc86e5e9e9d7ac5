from .comment import TagEntry
from .errors import HoverdocError
from .results import FailureKind, Lookup
from .protocols import (
    SymbolProtocol,
    ParameterSymbolProtocol,
    MetadataListProtocol,
    ArchiveProtocol,
    ArchiveLoaderProtocol,
)

__all__ = [
    "TagEntry",
    "HoverdocError",
    "FailureKind",
    "Lookup",
    "SymbolProtocol",
    "ParameterSymbolProtocol",
    "MetadataListProtocol",
    "ArchiveProtocol",
    "ArchiveLoaderProtocol",
]
