class ValidationError(ValueError):
    """Bad participant, amount or date key. Raised before anything is written."""


class StorageError(RuntimeError):
    """The backing store failed a read or write. Safe to retry the whole call."""
