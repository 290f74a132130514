"""Custom exception classes."""


class FieldValidationError(Exception):
    """Raised when a single form field fails validation."""

    def __init__(self, field_key: str, message: str):
        super().__init__(message)
        self.field_key = field_key
        self.message = message


class DuplicateRegistrationError(Exception):
    """Raised when a registration ID already exists in the store."""
    pass


class FileWriteError(Exception):
    """Raised when unable to write to JSON file."""
    pass
