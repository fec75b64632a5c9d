class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400
    retryable = False


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidTimeFormat(ValidationError):
    """Raised for a clock value that is not a valid 24-hour HH:MM."""


class ConflictError(DomainError):
    """The request contradicts the current state of the attendance day."""

    status_code = 409


class AlreadyCheckedIn(ConflictError):
    pass


class AlreadyCompletedToday(ConflictError):
    pass


class AlreadyCheckedOut(ConflictError):
    pass


class OverrideLocked(ConflictError):
    """The day is owned by a weekend/leave/mission override."""


class RecordNotFound(DomainError):
    status_code = 404


class StoreError(Exception):
    """Base exception raised by record store implementations."""

    status_code = 500
    retryable = False


class DuplicateRecordError(StoreError):
    """A uniqueness constraint of the store would be violated."""

    status_code = 409


class StoreUnavailable(StoreError):
    """Transient infrastructure failure, safe for the caller to retry."""

    status_code = 503
    retryable = True
