# catalog_import/core/exceptions.py

"""
Custom exceptions for the application.

Provides specific exception types for different error scenarios,
making error handling more precise and informative.
"""


class AppException(Exception):
    """Base exception for all application errors."""
    
    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)
    
    def to_dict(self) -> dict:
        """Convert exception to dictionary for JSON responses."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }


# File-related exceptions
class FileError(AppException):
    """Base class for file-related errors."""
    pass


class ImportFileNotFoundError(FileError):
    """Import file not found."""
    pass


class InvalidFileFormatError(FileError):
    """Invalid file format error."""
    pass


class FileTooLargeError(FileError):
    """File exceeds size limit."""
    pass


class FileReadError(FileError):
    """Error reading file."""
    pass


# Database exceptions
class DatabaseError(AppException):
    """Base class for database errors."""
    pass


class RecordNotFoundError(DatabaseError):
    """Requested record not found in database."""
    pass


class RestaurantNotFoundError(RecordNotFoundError):
    """Target restaurant for an import does not exist."""
    pass


# Configuration exceptions
class ConfigurationError(AppException):
    """Base class for configuration errors."""
    pass


class InvalidConfigError(ConfigurationError):
    """Configuration value is invalid."""
    pass
