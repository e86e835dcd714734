"""
Fiscal parameter extraction from the check URL fragment.

The tax authority portal is a single-page app: its check URLs carry the
parameters after the route in the fragment, e.g.
``https://mapr.tax.gov.me/ic/#/verify?iic=...&tin=...&crtd=...``.

No format validation happens here; run validate_fields for that.
"""

from .check_url import decode_check_url, parse_check_url
from .errors import (
    CrtdInvalidError,
    IicInvalidError,
    MissingFragmentError,
    MissingQueryInFragmentError,
    TinInvalidError,
)
from .models import FiscalParams


def parse_fragment_query(query: str) -> dict[str, str]:
    """
    Parse ``key=value`` pairs separated by ``&``.

    Each pair is split on its first ``=``; pairs without one are skipped.
    When a key repeats, the last occurrence wins.
    """
    params: dict[str, str] = {}
    for part in query.split("&"):
        key, sep, value = part.partition("=")
        if sep:
            params[key] = value
    return params


def extract_params(check_url: str) -> FiscalParams:
    """
    Pull iic, tin and crtd out of the fragment of a check URL.

    The URL is percent-decoded first; already decoded input is unaffected.

    ``+`` in crtd is replaced by a space: receipts often carry an unescaped
    offset sign that generic decoders would have read as a space.

    Raises:
        MalformedUrlError: the URL cannot be parsed
        MissingFragmentError: the URL has no ``#``
        MissingQueryInFragmentError: the fragment has no ``?`` part
        IicInvalidError, CrtdInvalidError, TinInvalidError: key is missing
    """
    decoded = decode_check_url(check_url)
    fragment = parse_check_url(decoded).fragment
    if "#" not in decoded:
        raise MissingFragmentError()

    # only the segment between the first and second ``?`` holds parameters
    segments = fragment.split("?")
    if len(segments) < 2:
        raise MissingQueryInFragmentError(fragment)

    params = parse_fragment_query(segments[1])

    if "iic" not in params:
        raise IicInvalidError()
    if "crtd" not in params:
        raise CrtdInvalidError()
    if "tin" not in params:
        raise TinInvalidError()

    return FiscalParams(
        iic=params["iic"],
        tin=params["tin"],
        crtd=params["crtd"].replace("+", " "),
    )
