#!/usr/bin/env python3
"""
Domain exceptions raised by the preference store and the matching services.

The web layer maps these onto HTTP status codes (see web/backend/exceptions.py).
"""


class ServiceException(Exception):
    """Base exception for service layer errors."""
    pass


class PreferenceNotFoundException(ServiceException):
    """Raised when a user has no saved preference record."""
    pass


class ProfileNotFoundException(ServiceException):
    """Raised when a profile is not found."""
    pass


class NotificationNotFoundException(ServiceException):
    """Raised when a notification is not found for the recipient."""
    pass


class PreferenceValidationException(ServiceException):
    """Raised when a preference record fails validation before persistence."""

    def __init__(self, message: str, errors=None):
        super().__init__(message)
        self.errors = errors or []


class ProfileRequiredException(ServiceException):
    """Raised when preferences are saved before the user has a profile."""
    pass


class InvalidPaginationException(ServiceException):
    """Raised when page or page size is not a positive integer."""
    pass
