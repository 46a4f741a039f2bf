"""Per-request tenant credentials carried in X-Gorgias-* headers."""

import re
from typing import Mapping, NamedTuple, Optional

from gorgias_mcp.errors import InvalidDomainError, MissingCredentialsError

DOMAIN_HEADER = "X-Gorgias-Domain"
EMAIL_HEADER = "X-Gorgias-Email"
API_KEY_HEADER = "X-Gorgias-API-Key"

REQUIRED_HEADERS = [DOMAIN_HEADER, EMAIL_HEADER, API_KEY_HEADER]

# the subdomain is the only part of the API host a tenant controls
DOMAIN_LABEL = re.compile(r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?")


class PartialCredentials(NamedTuple):
    domain: Optional[str] = None
    email: Optional[str] = None
    api_key: Optional[str] = None


class Credentials(NamedTuple):
    domain: str
    email: str
    api_key: str


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    value = headers.get(name)
    if value is None:
        # plain dicts are case-sensitive; Starlette/httpx header maps are not
        lowered = name.lower()
        value = next((v for k, v in headers.items() if k.lower() == lowered), None)
    return value or None


def extract_credentials(headers: Mapping[str, str]) -> PartialCredentials:
    return PartialCredentials(
        domain=_header(headers, DOMAIN_HEADER),
        email=_header(headers, EMAIL_HEADER),
        api_key=_header(headers, API_KEY_HEADER),
    )


def validate_credentials(partial: PartialCredentials) -> Credentials:
    """Return the full triple or raise naming every missing header, in domain, email, key order.

    The domain must also be a single DNS label.
    """
    missing = []
    if not partial.domain:
        missing.append(DOMAIN_HEADER)
    if not partial.email:
        missing.append(EMAIL_HEADER)
    if not partial.api_key:
        missing.append(API_KEY_HEADER)
    if missing:
        raise MissingCredentialsError(missing)
    if not DOMAIN_LABEL.fullmatch(partial.domain):
        raise InvalidDomainError(partial.domain)
    return Credentials(partial.domain, partial.email, partial.api_key)
