"""
Registry error taxonomy.

Every failure leaving a repository or service is one of these kinds.
The API layer maps `kind` to an HTTP status; `public_message` is the
only text a caller ever sees for internal and network failures.
"""


class RegistryError(Exception):
    """Base class for all registry failures."""
    kind = "internal_error"
    public_message = "Internal error"

    def __init__(self, message: str = None):
        super().__init__(message or self.public_message)
        self.message = message or self.public_message

    def to_dict(self) -> dict:
        return {"error": self.kind, "message": self.message}


class NotFoundError(RegistryError):
    """Requested entity does not exist."""
    kind = "not_found"
    public_message = "Not found"


class ConflictError(RegistryError):
    """Uniqueness violation on a non-idempotent create."""
    kind = "conflict"
    public_message = "Already exists"


class ValidationError(RegistryError):
    """Input outside the accepted contract (malformed id, unknown network)."""
    kind = "validation_error"
    public_message = "Invalid input"


class NetworkError(RegistryError):
    """The ledger RPC endpoint could not be reached."""
    kind = "network_error"
    public_message = "Ledger network unavailable"

    def to_dict(self) -> dict:
        # Transport detail stays in logs
        return {"error": self.kind, "message": self.public_message}


class InternalError(RegistryError):
    """Store failure or unexpected state."""
    kind = "internal_error"
    public_message = "Internal error"

    def to_dict(self) -> dict:
        return {"error": self.kind, "message": self.public_message}
