"""
Check URL validation rules.

Pure functions, no I/O. A check URL printed on a fiscal receipt is accepted
when its origin belongs to the tax authority and it carries the three fiscal
parameters (iic, tin, crtd) in the expected formats.

Design Decisions:
- Domain and field checks are independent and can be called in any order;
  verify_check_url runs the domain check first
- Field patterns match the raw decoded text rather than a parsed query, so
  parameters are found both in the query string and in a routed fragment
  (``#/verify?iic=...``)
- Percent-decoding never turns ``+`` into a space, so a timezone offset
  such as ``+01:00`` survives decoding
"""

import re
from urllib.parse import SplitResult, unquote, urlsplit

from .errors import (
    FIELD_ERRORS,
    FieldFormatError,
    MalformedUrlError,
    UnsupportedForeignSchemeError,
    UntrustedOriginError,
)
from .models import FiscalField, TaxScheme


# Origins of the Montenegrin tax authority check portal
TRUSTED_ORIGINS = (
    "https://mapr.tax.gov.me",
    "https://213.149.97.151",
)

# Recognised schemes we intentionally do not support yet
FOREIGN_ORIGINS = {
    "https://suf.purs.gov.rs": TaxScheme.SERBIA,
}

DEFAULT_PORTS = {
    "http": 80,
    "https": 443,
}

IIC_PATTERN = re.compile(r"\biic=[0-9a-fA-F]{32}(?![0-9a-fA-F])")
TIN_PATTERN = re.compile(r"\btin=\d{8}(?!\d)")
CRTD_PATTERN = re.compile(
    r"\bcrtd=\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d*)?(?:[+-]\d{2}:\d{2}|Z)?"
)

# Checked in this order; the first failing row decides the error
FIELD_RULES: tuple[tuple[FiscalField, re.Pattern[str], type[FieldFormatError]], ...] = tuple(
    (fiscal_field, pattern, FIELD_ERRORS[fiscal_field])
    for fiscal_field, pattern in (
        (FiscalField.IIC, IIC_PATTERN),
        (FiscalField.TIN, TIN_PATTERN),
        (FiscalField.CRTD, CRTD_PATTERN),
    )
)


def decode_check_url(check_url: str) -> str:
    """
    Percent-decode a check URL.

    Idempotent for URLs that are already decoded.
    """
    return unquote(check_url)


def parse_check_url(decoded_url: str) -> SplitResult:
    """
    Split a decoded URL, rejecting anything that is not an absolute URL.

    Raises:
        MalformedUrlError: if the URL has no scheme or host, or a bad port
    """
    try:
        parts = urlsplit(decoded_url)
        # Accessing .port validates it
        parts.port
    except ValueError as e:
        raise MalformedUrlError(decoded_url, str(e)) from e

    if not parts.scheme:
        raise MalformedUrlError(decoded_url, "missing scheme")
    if not parts.hostname:
        raise MalformedUrlError(decoded_url, "missing host")
    return parts


def url_origin(parts: SplitResult) -> str:
    """
    Serialize the origin (scheme, host, port) of a split URL.

    Scheme and host are lower-cased; a default port is omitted.
    """
    scheme = parts.scheme.lower()
    host = parts.hostname or ""
    if ":" in host:
        host = f"[{host}]"

    origin = f"{scheme}://{host}"
    port = parts.port
    if port is not None and port != DEFAULT_PORTS.get(scheme):
        origin = f"{origin}:{port}"
    return origin


def validate_domain(decoded_url: str) -> TaxScheme:
    """
    Check that a decoded URL points at the tax authority.

    Returns:
        The scheme the URL belongs to (always TaxScheme.MONTENEGRO)

    Raises:
        MalformedUrlError: the URL cannot be parsed
        UnsupportedForeignSchemeError: the origin is a known foreign scheme
        UntrustedOriginError: any other origin
    """
    origin = url_origin(parse_check_url(decoded_url))

    if origin in TRUSTED_ORIGINS:
        return TaxScheme.MONTENEGRO

    foreign_scheme = FOREIGN_ORIGINS.get(origin)
    if foreign_scheme is not None:
        raise UnsupportedForeignSchemeError(origin, foreign_scheme)

    raise UntrustedOriginError(origin)


def validate_fields(decoded_url: str) -> None:
    """
    Check the format of iic, tin and crtd anywhere in the decoded URL.

    Raises:
        IicInvalidError, TinInvalidError, CrtdInvalidError: naming the
        first field that is missing or malformed
    """
    for _, pattern, error in FIELD_RULES:
        if pattern.search(decoded_url) is None:
            raise error()


def verify_check_url(check_url: str) -> TaxScheme:
    """
    Decode a check URL and run the domain and field checks on it.

    Args:
        check_url: URL as scanned from the receipt, encoded or not

    Returns:
        The tax scheme of the URL
    """
    decoded_url = decode_check_url(check_url)
    scheme = validate_domain(decoded_url)
    validate_fields(decoded_url)
    return scheme
