"""
Check URL exceptions mapped to stable error codes.

Every failure of the validation, extraction and verification pipeline is a
subclass of FiscalCheckError carrying a machine-readable ``code`` that callers
use to pick a user-facing message.
"""

from .models import FiscalField, TaxScheme


class FiscalCheckError(Exception):
    """Base exception for fiscal check URL processing."""

    code = "fiscal_check_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class CheckUrlError(FiscalCheckError):
    """The check URL was rejected before anything was sent to the authority."""


class MalformedUrlError(CheckUrlError):
    code = "malformed_check_url"

    def __init__(self, check_url: str, reason: str = "not an absolute URL"):
        self.check_url = check_url
        super().__init__(f"Check URL {check_url!r} cannot be parsed: {reason}")


class UntrustedOriginError(CheckUrlError):
    code = "wrong_check_url"

    def __init__(self, origin: str):
        self.origin = origin
        super().__init__(f"Check URL origin {origin!r} is not a known tax authority")


class UnsupportedForeignSchemeError(CheckUrlError):
    """The origin belongs to a recognised fiscalization scheme we do not handle."""

    code = "serbian_checks_not_supported_yet"

    def __init__(self, origin: str, scheme: TaxScheme):
        self.origin = origin
        self.scheme = scheme
        super().__init__(f"Checks issued under the {scheme.value!r} scheme ({origin}) are not supported yet")


class FieldFormatError(CheckUrlError):
    """A fiscal parameter is missing from the URL or has the wrong format."""

    field: FiscalField

    def __init__(self):
        name = self.field.value
        super().__init__(f"'{name}' parameter is missing or has a wrong format")


class IicInvalidError(FieldFormatError):
    code = "iic_param_is_missing_or_wrong_format"
    field = FiscalField.IIC


class TinInvalidError(FieldFormatError):
    code = "tin_param_is_missing_or_wrong_format"
    field = FiscalField.TIN


class CrtdInvalidError(FieldFormatError):
    code = "crtd_param_is_missing_or_wrong_format"
    field = FiscalField.CRTD


FIELD_ERRORS: dict[FiscalField, type[FieldFormatError]] = {
    FiscalField.IIC: IicInvalidError,
    FiscalField.TIN: TinInvalidError,
    FiscalField.CRTD: CrtdInvalidError,
}


class ExtractionError(CheckUrlError):
    """Parameters could not be located in the URL fragment."""


class MissingFragmentError(ExtractionError):
    code = "missing_fragment"

    def __init__(self):
        super().__init__("Check URL has no fragment")


class MissingQueryInFragmentError(ExtractionError):
    code = "missing_fragment_params"

    def __init__(self, fragment: str):
        self.fragment = fragment
        super().__init__(f"Fragment {fragment!r} carries no parameters")


class VerificationRequestFailedError(FiscalCheckError):
    """The request to the authority's verification endpoint did not complete."""

    code = "verification_request_failed"

    def __init__(self, endpoint: str, reason: str):
        self.endpoint = endpoint
        self.reason = reason
        super().__init__(f"Verification request to {endpoint} failed: {reason}")
