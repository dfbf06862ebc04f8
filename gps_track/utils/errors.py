"""
Error handling utilities.

This module provides a consistent error handling framework for the application,
including custom exceptions and error logging utilities.
"""

import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for all application errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize the error.

        Args:
            message: Error message
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def log(self, level: int = logging.ERROR) -> None:
        """
        Log the error.

        Args:
            level: Logging level
        """
        logger.log(level, f"{self.__class__.__name__}: {self.message}")
        if self.details:
            logger.log(level, f"Error details: {self.details}")

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the error to a dictionary.

        Returns:
            Dict with error information
        """
        return {
            'error_type': self.__class__.__name__,
            'message': self.message,
            'details': self.details
        }


class ValidationError(AppError):
    """Error for validation failures."""

    def __init__(self, message: str, field: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        """
        Initialize the validation error.

        Args:
            message: Error message
            field: Field that failed validation
            details: Additional error details
        """
        details = details or {}
        if field:
            details['field'] = field
        super().__init__(message, details)


class InvalidInputError(ValidationError):
    """Raised when a point sequence is not well formed."""

    def __init__(self, message: str, index: Optional[int] = None, details: Optional[Dict[str, Any]] = None):
        details = details or {}
        if index is not None:
            details['index'] = index
        super().__init__(message, field='points', details=details)


class DataError(AppError):
    """Error for data-related issues."""

    def __init__(self, message: str, data_source: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        """
        Initialize the data error.

        Args:
            message: Error message
            data_source: Source of the data
            details: Additional error details
        """
        details = details or {}
        if data_source:
            details['data_source'] = data_source
        super().__init__(message, details)


class FormatError(DataError):
    """Raised when a track file cannot be parsed as GPX."""


class FileError(AppError):
    """Error for file-related issues."""

    def __init__(self, message: str, file_path: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        """
        Initialize the file error.

        Args:
            message: Error message
            file_path: Path to the file
            details: Additional error details
        """
        details = details or {}
        if file_path:
            details['file_path'] = file_path
        super().__init__(message, details)


class ReadError(FileError):
    """Raised when a track file cannot be read."""


class MapHostError(AppError):
    """Error raised by a map host for unknown or duplicate source and layer ids."""

    def __init__(self, message: str, object_id: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        details = details or {}
        if object_id:
            details['id'] = object_id
        super().__init__(message, details)
