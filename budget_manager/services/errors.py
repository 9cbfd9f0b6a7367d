class ValidationError(ValueError):
    """Bad user input. Raised before anything is written."""


class StorageError(Exception):
    """The database rejected or failed a write; the write was rolled back."""
