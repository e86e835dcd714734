"""
Fiscal check orchestrator service.

Coordinates the check URL pipeline:
1. Percent-decoding
2. Domain and field validation
3. Fragment parameter extraction
4. Submission to the tax authority

This is the primary interface for the API layer.
"""

import logging
from dataclasses import dataclass

from spend_lens.domain.check_url import decode_check_url, validate_domain, validate_fields
from spend_lens.domain.errors import CheckUrlError, VerificationRequestFailedError
from spend_lens.domain.extraction import extract_params
from spend_lens.domain.models import FiscalParams, TaxScheme

from .verification import VerificationClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FiscalCheckResult:
    """Parameters sent to the authority and its raw answer."""
    params: FiscalParams
    response_text: str


class FiscalCheckService:
    """
    Validates check URLs and forwards them to the tax authority.

    Example:
        service = FiscalCheckService(VerificationClient(timeout=60))
        result = service.verify(scanned_url)
        print(result.response_text)
    """

    def __init__(self, client: VerificationClient | None = None) -> None:
        self.client = client or VerificationClient()

    def validate(self, check_url: str) -> TaxScheme:
        """Decode a check URL and run the domain and field checks."""
        decoded_url = decode_check_url(check_url)
        try:
            scheme = validate_domain(decoded_url)
            validate_fields(decoded_url)
        except CheckUrlError as e:
            logger.info(f"Check URL rejected ({e.code}): {decoded_url}")
            raise
        return scheme

    def extract(self, check_url: str) -> FiscalParams:
        """Extract fiscal parameters from the check URL fragment."""
        try:
            return extract_params(check_url)
        except CheckUrlError as e:
            logger.info(f"Parameter extraction failed ({e.code}): {check_url}")
            raise

    def submit(self, params: FiscalParams) -> FiscalCheckResult:
        """Send already structured parameters to the authority."""
        try:
            response_text = self.client.submit(params)
        except VerificationRequestFailedError as e:
            logger.warning(f"Verification request failed: {e.reason}")
            raise

        logger.info(f"Verification response received for iic={params.iic}")
        return FiscalCheckResult(params=params, response_text=response_text)

    def verify(self, check_url: str) -> FiscalCheckResult:
        """
        Run the full pipeline on a scanned check URL.

        Raises:
            CheckUrlError: the URL failed validation or extraction
            VerificationRequestFailedError: the authority could not be reached
        """
        self.validate(check_url)
        params = self.extract(check_url)
        return self.submit(params)
