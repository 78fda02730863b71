"""Custom exception classes."""


class ValidationError(Exception):
    """Raised when registration data fails validation."""
    pass


class DuplicateError(Exception):
    """Raised when the email is already registered for the same event."""
    pass


class StorageError(Exception):
    """Raised when unable to write the registration store."""
    pass
