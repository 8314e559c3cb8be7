"""Application-layer errors – raised while wiring the search layer together."""

from __future__ import annotations

from admin_search.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class UnknownEntityError(ApplicationError):
    """An entity name that cannot address a collection or index (blank)."""

    default_code = "unknown_entity"

    def __init__(self, entity: str, message: str | None = None) -> None:
        super().__init__(message or f"Entity '{entity}' is not searchable")
        self.entity = entity


__all__ = ["ApplicationError", "UnknownEntityError"]
