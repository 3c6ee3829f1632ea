"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Each subclass is a stable classification the boundary can map to its own
response.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class NotFoundError(DomainException):
    """A referenced product, category, order or user does not exist."""


class ForbiddenError(DomainException):
    """The caller's role or ownership does not permit the operation."""


class InsufficientStockError(DomainException):
    """Requested quantity exceeds the stock available at reservation time."""


class InvalidTransitionError(DomainException):
    """The requested order status change is not allowed."""


class AlreadyExistsError(DomainException):
    """An identifying field (username, product name...) is already taken."""


class AuthenticationError(DomainException):
    """Credentials could not be verified."""


class ConcurrencyError(DomainException):
    """A conditional update kept losing to concurrent writers."""


class ReservationConflictError(ConcurrencyError):
    pass


class ConcurrentUpdateError(ConcurrencyError):
    pass
