from typing import Any, Dict, List, Optional


class GorgiasApiError(Exception):
    """A non-2xx answer from the Gorgias API."""

    def __init__(self, message: str, status_code: Optional[int] = None, *, retryable: bool = False):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.retryable = retryable


class RateLimitError(GorgiasApiError):
    """HTTP 429. `retry_after` is the pause in seconds the caller should observe."""

    def __init__(self, message: str, retry_after: int):
        super().__init__(message, 429, retryable=True)
        self.retry_after = retry_after


class AuthenticationError(GorgiasApiError):
    """HTTP 401/403: the tenant's credentials were rejected upstream. Never retried."""

    def __init__(self, message: str, status_code: int = 401):
        super().__init__(message, status_code, retryable=False)


class CredentialsError(ValueError):
    """The X-Gorgias-* headers cannot be used to reach a tenant."""


class MissingCredentialsError(CredentialsError):
    def __init__(self, missing: List[str]):
        super().__init__(f"Missing required headers: {', '.join(missing)}")
        self.missing = missing


class InvalidDomainError(CredentialsError):
    def __init__(self, domain: str):
        super().__init__("Invalid X-Gorgias-Domain header: expected a Gorgias subdomain such as 'acme'")
        self.domain = domain


class JsonArgumentError(ValueError):
    """A free-text JSON tool argument could not be parsed or has the wrong shape."""


def error_details(error: BaseException) -> Dict[str, Any]:
    """Describe an exception as a plain dict, safe to serialize and log."""
    details: Dict[str, Any] = {
        "name": type(error).__name__,
        "message": getattr(error, "message", None) or str(error),
    }
    if isinstance(error, GorgiasApiError):
        if error.status_code is not None:
            details["statusCode"] = error.status_code
        details["retryable"] = error.retryable
    if isinstance(error, RateLimitError):
        details["retryAfter"] = error.retry_after
    return details
