# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

from pydantic import BaseModel


class HTTPError(BaseModel):
    """
    General HTTPException raised
    """

    detail: str


class ErrorResponse(BaseModel):
    """
    Body rendered for domain errors.
    * error: Machine readable code identifying the exception
    * error_description: Human readable description of the error type
    * additional_error_description: Further human readable information on this occurrence
    """

    error: str
    error_description: str
    additional_error_description: str | None = None
