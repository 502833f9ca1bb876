"""Exceptions raised by repositories and services, each mapped to an HTTP status."""

from __future__ import annotations


class ClinicError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ClinicError):
    status_code = 400

    def __init__(self, message: str, fields: tuple[str, ...] = ()):
        super().__init__(message)
        self.fields = fields


class DuplicateEmailError(ClinicError):
    status_code = 400


class InvalidCredentialsError(ClinicError):
    status_code = 401


class StorageError(ClinicError):
    """Raised when the durable medium could not be written."""

    status_code = 500
