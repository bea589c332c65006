"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class DataAccessError(DomainError):
    """Raised when a call to an external store fails.

    Covers network failures, authentication problems and policy denials
    from the hosted backend. Never retried automatically.
    """

    def __init__(self, operation: str, message: str):
        self.operation = operation
        super().__init__(f"{operation} failed: {message}")


class AuthorizationDenied(DomainError):
    """Raised when a moderation action is not permitted for the actor."""

    def __init__(self, action: str, reason: str):
        self.action = action
        self.reason = reason
        super().__init__(reason)


class InvariantViolation(DomainError):
    """Raised when an operation would break a structural invariant."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")
