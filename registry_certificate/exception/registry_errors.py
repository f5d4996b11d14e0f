# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Errors of the certificate registry operations.
Every error aborts the operation without any change to the registry.
"""

from fastapi import HTTPException, status


class RegistryError(HTTPException):
    """Base class for all certificate registry errors."""

    error: str = None
    """Machine readable code identifieng the exception."""

    error_description: str = None
    """Human readable error description for the error type."""

    _fields: list[str] = [
        "error",
        "error_description",
    ]
    """Fields to render into the response."""

    _optional_fields: list[str] = ["additional_error_description"]
    """Optional fiels which only get renderd into the response if available."""

    default_status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, additional_error_description: str = None) -> None:
        """Create a registry error.

        Args:
            additional_error_description (str, optional): Additional, human readable data, to identify the issue resulting in this exception.
        """
        super().__init__(self.default_status_code, self.error, headers={"Cache-Control": "no-store"})
        self.additional_error_description = additional_error_description

    def __str__(self) -> str:
        if self.additional_error_description:
            return f"{self.error}: {self.additional_error_description}"
        return self.error


class AuthorizationError(RegistryError):
    """The caller lacks the role required for the operation."""

    error = "unauthorized"
    error_description = "The caller is not authorized to perform this operation."
    default_status_code = status.HTTP_403_FORBIDDEN


class InvalidArgumentError(RegistryError):
    """Empty certificate id, zero or malformed hash, zero or malformed address."""

    error = "invalid_argument"
    error_description = "The request contains a missing, empty or malformed parameter."
    default_status_code = status.HTTP_400_BAD_REQUEST


class AlreadyExistsError(RegistryError):
    error = "already_exists"
    error_description = "A certificate with this identifier has already been issued."
    default_status_code = status.HTTP_409_CONFLICT


class NotFoundError(RegistryError):
    error = "not_found"
    error_description = "No certificate with this identifier has been issued."
    default_status_code = status.HTTP_404_NOT_FOUND


class AlreadyRevokedError(RegistryError):
    error = "already_revoked"
    error_description = "The certificate has already been revoked."
    default_status_code = status.HTTP_409_CONFLICT


class RegistryNotInitializedError(RegistryError):
    """The registry has no owner yet, startup did not complete."""

    error = "registry_not_initialized"
    error_description = "The registry has not been initialized with an owner."
    default_status_code = status.HTTP_503_SERVICE_UNAVAILABLE
