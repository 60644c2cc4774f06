# core/exceptions.py
from __future__ import annotations


class DomainError(Exception):
    """Base class for domain-level errors."""
    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when data is invalid or violates constraints."""


class NotFoundError(DomainError):
    """Raised when an entity is not found."""


class BusinessRuleError(DomainError):
    """Raised when business rules are violated (e.g., circular dependencies)."""


class CircularDependencyError(BusinessRuleError):
    """Raised when a project's dependency graph cannot be ordered."""
    def __init__(
        self,
        message: str,
        *,
        task_ids: list[str] | None = None,
        edges: list[tuple[str, str]] | None = None,
        code: str | None = "SCHEDULE_CYCLE",
    ):
        super().__init__(message, code=code)
        self.task_ids: list[str] = list(task_ids or [])
        self.edges: list[tuple[str, str]] = list(edges or [])


class PersistenceError(DomainError):
    """Raised when computed results could not be written back to storage."""
