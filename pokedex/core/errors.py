"""Error Hierarchy — typed, categorized exceptions for all Pokedex failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Repository errors never carry driver/HTTP exceptions outward (chained via `from` only)
    - Use-case errors map 1:1 from repository errors (Conflict, NotFound, Unknown)
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with PokedexError base: FastAPI global handler catches all
    - Two layers of vocabulary (repository vs use-case): backends speak storage,
      use-cases speak to callers, and the mapping between them stays explicit
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    STORAGE = "storage"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    pokemon_number: int | None = None
    backend: str | None = None
    operation: str | None = None


class PokedexError(Exception):
    """Base exception for all Pokedex errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "pokemon_number": self.context.pokemon_number,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Validation ─────────────────────────────────────────────────

class InvalidValueError(PokedexError):
    """A primitive was rejected by a value-object constructor."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_VALUE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


# ─── Repository Errors (raised by backends) ─────────────────────

class RepositoryError(PokedexError):
    """Base for every failure a PokemonRepository may raise."""


class DuplicateNumberError(RepositoryError):
    """A record with this number already exists."""
    def __init__(self, number: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.pokemon_number = number
        super().__init__(
            f"Pokemon #{number} already exists",
            "DUPLICATE_NUMBER", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx, 409,
        )
        self.number = number


class NumberNotFoundError(RepositoryError):
    """No record with this number exists."""
    def __init__(self, number: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.pokemon_number = number
        super().__init__(
            f"Pokemon #{number} not found",
            "NUMBER_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )
        self.number = number


class StorageError(RepositoryError):
    """The storage medium failed (lock, query, transaction, network, decoding)."""
    def __init__(
        self,
        message: str,
        operation: str,
        backend: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        ctx.backend = backend
        super().__init__(
            f"Storage {operation} failed ({backend}): {message}",
            "STORAGE_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.operation = operation
        self.backend = backend


# ─── Use-Case Errors (raised by services) ───────────────────────

class BadRequestError(PokedexError):
    """Input failed validation before any storage access."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "BAD_REQUEST", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class ConflictError(PokedexError):
    """Number already occupied."""
    def __init__(self, number: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.pokemon_number = number
        super().__init__(
            f"Pokemon #{number} already exists",
            "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )


class NotFoundError(PokedexError):
    """Number not present in the catalog."""
    def __init__(self, number: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.pokemon_number = number
        super().__init__(
            f"Pokemon #{number} not found",
            "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )


class UnknownError(PokedexError):
    """Storage failed; the caller cannot correct this by changing input."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"An unknown error occurred during {operation}",
            "UNKNOWN_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation
