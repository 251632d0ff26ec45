class RecordNotFoundError(ValueError):
    """The requested record (or an entry inside it) does not exist."""


class NotAuthorizedError(ValueError):
    """The caller may not modify this record."""


class InvalidMediaError(ValueError):
    """An uploaded file is missing, empty, too large or of the wrong type."""
