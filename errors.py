"""Storefront errors.

Services raise these; the API layer maps each one to a status code and a
structured body via ``code``.
"""
from __future__ import annotations
from typing import Optional


class StorefrontError(Exception):
    code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


class StoreError(StorefrontError):
    """The document store failed to complete an operation."""
    code = "STORE_ERROR"
    status_code = 500


class NotFound(StorefrontError):
    code = "NOT_FOUND"
    status_code = 404


class ValidationError(StorefrontError):
    code = "VALIDATION_ERROR"
    status_code = 400

    def __init__(self, message: str, fields: Optional[list[str]] = None):
        super().__init__(message)
        self.fields = fields or []

    def to_dict(self) -> dict:
        return {**super().to_dict(), "fields": self.fields}
