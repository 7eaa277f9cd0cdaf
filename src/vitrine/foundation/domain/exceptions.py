"""Domain exception hierarchy for type-safe error handling.

This module provides the base exception hierarchy for all domain errors.
Exceptions include structured error codes and context for consistent
API error handling and logging across bounded contexts.

Example:
    >>> from vitrine.foundation.domain.exceptions import UnsupportedError
    >>> raise UnsupportedError(
    ...     'Price system "b2b" is not supported. Please check the configuration.',
    ...     category="price_system",
    ...     key="b2b",
    ... )
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from uuid import UUID

__all__ = [
    "ConflictError",
    "DomainError",
    "InvalidConfigError",
    "NotFoundError",
    "UnsupportedError",
    "ValidationError",
]


class DomainError(Exception):
    """Base class for all domain errors.

    Provides error code and structured context for debugging. All domain
    exceptions inherit from this class to enable consistent API error
    handling and logging.

    Attributes:
        error_code: Machine-readable error code for client handling.
        message: Human-readable error description.
        context: Structured debugging information (service keys, field names).

    Example:
        >>> raise DomainError("Operation failed", context={"tenant": "default"})
        DomainError: Operation failed (tenant=default)
    """

    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize domain error with message and optional context.

        Args:
            message: Human-readable error description.
            context: Structured debugging information. Keys should be snake_case.
                     Values are typically strings, ints, or primitive types.
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """String representation including context for logging."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message

    def __repr__(self) -> str:
        """Detailed representation for debugging."""
        return f"{self.__class__.__name__}({self.message!r}, context={self.context!r})"


class NotFoundError(DomainError):
    """Raised when a requested resource does not exist.

    Maps to HTTP 404 Not Found.

    Attributes:
        error_code: "RESOURCE_NOT_FOUND" (class constant).
        resource_type: Type of missing resource.
        resource_id: Identifier of missing resource.

    Example:
        >>> raise NotFoundError("ElementMetadata", 42)
        NotFoundError: ElementMetadata not found: 42
    """

    error_code: str = "RESOURCE_NOT_FOUND"

    def __init__(
        self,
        resource_type: str,
        resource_id: UUID | str | int,
        **extra_context: Any,
    ) -> None:
        """Initialize not found error.

        Args:
            resource_type: Type of resource (e.g., "ElementMetadata").
            resource_id: Identifier of missing resource. Converted to string.
            **extra_context: Additional debugging context.
        """
        self.resource_type = resource_type
        self.resource_id = resource_id
        message = f"{resource_type} not found: {resource_id}"
        context = {
            "resource_type": resource_type,
            "resource_id": str(resource_id),
            **extra_context,
        }
        super().__init__(message, context)


class ValidationError(DomainError):
    """Raised when input fails domain validation rules.

    Maps to HTTP 422 Unprocessable Entity.

    Attributes:
        error_code: "VALIDATION_ERROR" (class constant).
        field: Field path that failed validation.
        reason: Human-readable validation failure reason.

    Example:
        >>> raise ValidationError("service_key", "Missing separator")
        ValidationError: Validation failed for 'service_key': Missing separator
    """

    error_code: str = "VALIDATION_ERROR"

    def __init__(
        self,
        field: str,
        reason: str,
        **extra_context: Any,
    ) -> None:
        """Initialize validation error.

        Args:
            field: Field path that failed validation.
            reason: Human-readable validation failure reason.
            **extra_context: Additional debugging context.
        """
        self.field = field
        self.reason = reason
        message = f"Validation failed for '{field}': {reason}"
        context = {
            "field": field,
            "reason": reason,
            **extra_context,
        }
        super().__init__(message, context)


class ConflictError(DomainError):
    """Raised when an operation conflicts with current stored state.

    Maps to HTTP 409 Conflict. Used when persisted data violates a
    uniqueness expectation, such as two metadata rows for the same column.

    Attributes:
        error_code: "CONFLICT" (class constant).
        reason: Description of the conflict.
    """

    error_code: str = "CONFLICT"

    def __init__(
        self,
        reason: str,
        **context: Any,
    ) -> None:
        """Initialize conflict error.

        Args:
            reason: Description of conflict.
            **context: Additional debugging context.
        """
        self.reason = reason
        message = f"Conflict: {reason}"
        super().__init__(message, context)


class UnsupportedError(DomainError):
    """Raised when a requested service is not registered.

    Configuration-absence error: the requested category/key combination
    does not exist in the corresponding registry. Never retried, never
    replaced by a silent default.

    Attributes:
        error_code: "UNSUPPORTED" (class constant).

    Example:
        >>> raise UnsupportedError(
        ...     'Cart manager for tenant "b2b" is not defined.',
        ...     category="cart_manager",
        ...     key="b2b",
        ... )
    """

    error_code: str = "UNSUPPORTED"

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message, context)


class InvalidConfigError(DomainError):
    """Raised when the framework configuration cannot be loaded.

    Attributes:
        error_code: "INVALID_CONFIG" (class constant).
    """

    error_code: str = "INVALID_CONFIG"

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message, context)
