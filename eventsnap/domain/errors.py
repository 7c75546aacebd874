class DomainError(Exception):
    """Base class for all domain-level errors."""

    pass


class StoreUnavailable(DomainError):
    """The shared key-value store could not be reached or rejected the command."""

    pass


class InvalidOrExpiredCode(DomainError):
    """No verification code is stored for the principal, or it does not match."""

    pass


class QuotaExceeded(DomainError):
    """The parent resource already holds as many dependents as it may."""

    def __init__(self, ceiling: int) -> None:
        super().__init__(f"quota of {ceiling} reached")
        self.ceiling = ceiling


class RateLimited(DomainError):
    """Too many requests from one client on one route inside the current window."""

    def __init__(self, retry_after: int) -> None:
        super().__init__(f"rate limited, retry in {retry_after}s")
        self.retry_after = retry_after


class QrCodeNotFound(DomainError):
    """No QR code matches the lookup criteria (id or token)."""

    pass
