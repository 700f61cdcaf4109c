# key_registry/core/errors.py

from enum import Enum


class ErrorCategory(str, Enum):
    VALIDATION = "validation"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


class RegistryError(Exception):
    """Base exception for everything the registry reports to a caller."""

    def __init__(self, message: str, code: str, category: ErrorCategory, http_status: int = 500):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.http_status = http_status

    def to_response(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
            }
        }


# ---------- 400 / 409 ----------

class MalformedRequestError(RegistryError):
    """Body or parameters failed structural validation before reaching the store."""

    def __init__(self, errors: list[dict]):
        super().__init__(
            "Invalid request data", "VALIDATION_ERROR", ErrorCategory.VALIDATION, 400
        )
        # Field paths and messages only; input values may hold key material
        self.details = [
            {
                "field": ".".join(str(loc) for loc in e["loc"]),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in errors
        ]

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = self.details
        return response


class InvalidEmailError(RegistryError):
    def __init__(self, email: str):
        super().__init__(
            "Invalid email address", "INVALID_EMAIL", ErrorCategory.VALIDATION, 400
        )
        self.email = email


class EmailAlreadyRegisteredError(RegistryError):
    def __init__(self, email: str):
        super().__init__(
            "Email is already registered", "EMAIL_ALREADY_REGISTERED", ErrorCategory.CONFLICT, 409
        )
        self.email = email


# ---------- 5xx ----------

class DatabaseError(RegistryError):
    """Store interaction failed. The driver message stays in the logs."""

    def __init__(self, operation: str):
        super().__init__(
            f"Database {operation} failed", "DATABASE_ERROR", ErrorCategory.DATABASE, 500
        )
        self.operation = operation


class DatabaseUnavailableError(RegistryError):
    """No pooled connection became available in time."""

    def __init__(self, operation: str):
        super().__init__(
            "Database is busy, try again later", "DATABASE_UNAVAILABLE", ErrorCategory.DATABASE, 503
        )
        self.operation = operation


class InternalError(RegistryError):
    def __init__(self):
        super().__init__(
            "An unexpected error occurred", "INTERNAL_ERROR", ErrorCategory.INTERNAL, 500
        )
