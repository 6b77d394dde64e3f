"""Cache exceptions.

Store failures are translated into these types once, at the connection
scope, so callers never handle redis-py exceptions directly.
"""

from typing import Any


class CacheException(Exception):
    """Base exception for all cache errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. key, kind).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class StoreUnavailableError(CacheException):
    """Raised when the pool is exhausted or the store cannot be reached."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            f"Cache store unavailable: {reason}",
            "STORE_UNAVAILABLE",
            {"reason": reason},
        )


class StoreCommandError(CacheException):
    """Raised when the store rejects a command (e.g. INCR on a non-integer value)."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            f"Cache store rejected command: {reason}",
            "STORE_COMMAND_ERROR",
            {"reason": reason},
        )


class SerializationError(CacheException):
    """Raised when a value cannot be converted to or from its stored text."""

    def __init__(self, kind: type, reason: str) -> None:
        """Initialize with the requested kind and the underlying failure.

        Args:
            kind: Python type the value was being converted to or from.
            reason: Description of the conversion failure.
        """
        kind_name = getattr(kind, "__name__", repr(kind))
        super().__init__(
            f"Cannot convert cached value as {kind_name}: {reason}",
            "SERIALIZATION_ERROR",
            {"kind": kind_name, "reason": reason},
        )


class OverlappingPrefixError(CacheException):
    """Raised when two key namespaces overlap as string prefixes."""

    def __init__(self, prefix: str, other: str) -> None:
        super().__init__(
            f"Key prefix {prefix!r} overlaps with {other!r}",
            "OVERLAPPING_PREFIX",
            {"prefix": prefix, "other": other},
        )
