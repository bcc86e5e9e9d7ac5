from .dita import MetadataList, parse_dita_document
from .exceptions import ArchiveError, MetadataParseError
from .index import ArchiveMetadataIndex, comment_lookup
from .swc import SwcArchive, SwcArchiveLoader

__all__ = [
    "MetadataList",
    "parse_dita_document",
    "ArchiveError",
    "MetadataParseError",
    "ArchiveMetadataIndex",
    "comment_lookup",
    "SwcArchive",
    "SwcArchiveLoader",
]
