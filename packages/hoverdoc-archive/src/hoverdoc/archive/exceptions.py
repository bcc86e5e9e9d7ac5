from hoverdoc.spec import HoverdocError


class ArchiveError(HoverdocError):
    """The archive does not exist or is not a readable zip container."""


class MetadataParseError(HoverdocError):
    """A documentation metadata document could not be parsed."""
