class HoverdocError(Exception):
    """Base class for errors raised by hoverdoc collaborators."""
