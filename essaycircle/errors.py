# essaycircle/errors.py
# -*- coding: utf-8 -*-
"""
Erreurs métier typées.

Chaque erreur porte un `code` stable (discriminant lu par la couche HTTP) et un
`status_code` HTTP. Les services lèvent, les routes ne font que traduire.
"""

from __future__ import annotations

from typing import List, Optional


class AppError(Exception):
    """Base de toutes les erreurs remontées aux clients."""

    status_code = 500
    default_code = "UNEXPECTED_ERROR"

    def __init__(self, message: str, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code

    def to_payload(self) -> dict:
        return {"message": self.message, "code": self.code}


class ValidationError(AppError):
    status_code = 400
    default_code = "VALIDATION_ERROR"

    def __init__(self, message: str = "Invalid data", errors: Optional[List[dict]] = None,
                 code: Optional[str] = None) -> None:
        super().__init__(message, code)
        self.errors = errors or []

    def to_payload(self) -> dict:
        payload = super().to_payload()
        if self.errors:
            payload["errors"] = self.errors
        return payload


class AuthenticationError(AppError):
    status_code = 401
    default_code = "UNAUTHENTICATED"


class ForbiddenError(AppError):
    status_code = 403
    default_code = "FORBIDDEN"


AuthorizationError = ForbiddenError


class NotFoundError(AppError):
    status_code = 404
    default_code = "NOT_FOUND"


class ConflictError(AppError):
    status_code = 409
    default_code = "CONFLICT"


class UnexpectedError(AppError):
    status_code = 500
    default_code = "UNEXPECTED_ERROR"


class DuplicateError(Exception):
    """Levée par un store quand une contrainte d'unicité est violée."""


class RecordLockedError(Exception):
    """Levée par un store quand l'enregistrement n'accepte plus d'écriture (revue soumise)."""
