"""
Spend Lens - fiscal receipt check URL verification.

Validates the check URLs embedded in fiscalized receipts, extracts the
invoice parameters they attest to and submits them to the tax authority.
"""

from .domain.check_url import decode_check_url, validate_domain, validate_fields, verify_check_url
from .domain.errors import (
    CheckUrlError,
    CrtdInvalidError,
    ExtractionError,
    FieldFormatError,
    FiscalCheckError,
    IicInvalidError,
    MalformedUrlError,
    MissingFragmentError,
    MissingQueryInFragmentError,
    TinInvalidError,
    UnsupportedForeignSchemeError,
    UntrustedOriginError,
    VerificationRequestFailedError,
)
from .domain.extraction import extract_params
from .domain.models import FiscalField, FiscalParams, TaxScheme

__version__ = "0.1.0"
__all__ = [
    "CheckUrlError",
    "CrtdInvalidError",
    "ExtractionError",
    "FieldFormatError",
    "FiscalCheckError",
    "FiscalField",
    "FiscalParams",
    "IicInvalidError",
    "MalformedUrlError",
    "MissingFragmentError",
    "MissingQueryInFragmentError",
    "TaxScheme",
    "TinInvalidError",
    "UnsupportedForeignSchemeError",
    "UntrustedOriginError",
    "VerificationRequestFailedError",
    "decode_check_url",
    "extract_params",
    "validate_domain",
    "validate_fields",
    "verify_check_url",
]
