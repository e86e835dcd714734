"""
Tax authority invoice verification client.

Posts the fiscal parameters of a receipt to the authority's verification
endpoint as a multipart form and hands back the response body untouched.

Handles:
- One POST per call, no retries
- Overall request timeout (60 seconds by default)
- Transport failures surfaced as VerificationRequestFailedError

The HTTP status is not inspected: whatever the authority answers is the
caller's to interpret.
"""

import logging
import time

import httpx

from spend_lens.domain.errors import VerificationRequestFailedError
from spend_lens.domain.models import FiscalParams

logger = logging.getLogger(__name__)


VERIFY_INVOICE_URL = "https://mapr.tax.gov.me/ic/api/verifyInvoice"
DEFAULT_TIMEOUT = 60.0


def build_form(params: FiscalParams) -> dict[str, tuple[None, str]]:
    """
    Build the multipart parts expected by the authority.

    A ``None`` filename makes httpx send each part as plain text.
    """
    return {
        "iic": (None, params.iic),
        "dateTimeCreated": (None, params.crtd),
        "tin": (None, params.tin),
    }


class VerificationClient:
    """
    Client for the tax authority's invoice verification endpoint.

    Example:
        client = VerificationClient()
        body = client.submit(FiscalParams(iic="...", tin="02404281", crtd="..."))

    An injected httpx.Client is reused across calls and left open; without
    one a fresh client is created and closed for every call.
    """

    def __init__(
        self,
        endpoint: str = VERIFY_INVOICE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.Client | None = None,
    ) -> None:
        """
        Initialize verification client.

        Args:
            endpoint: Verification endpoint URL
            timeout: Overall request timeout in seconds
            client: Shared httpx client (optional)
        """
        self.endpoint = endpoint
        self.timeout = timeout
        self._client = client

    def submit(self, params: FiscalParams) -> str:
        """
        Submit fiscal parameters for verification.

        Args:
            params: Parameters extracted from the check URL

        Returns:
            The response body, verbatim

        Raises:
            VerificationRequestFailedError: on connection errors, timeouts
            or an unreadable response body
        """
        logger.debug(f"Submitting verification for iic={params.iic} to {self.endpoint}")

        try:
            if self._client is not None:
                return self._post(self._client, params)
            with httpx.Client() as client:
                return self._post(client, params)
        except httpx.TimeoutException as e:
            raise VerificationRequestFailedError(
                self.endpoint, f"timed out after {self.timeout}s"
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise VerificationRequestFailedError(self.endpoint, str(e) or type(e).__name__) from e

    def _post(self, client: httpx.Client, params: FiscalParams) -> str:
        # httpx timeouts apply per phase; the deadline bounds the whole call
        deadline = time.monotonic() + self.timeout
        with client.stream(
            "POST",
            self.endpoint,
            files=build_form(params),
            timeout=httpx.Timeout(self.timeout),
        ) as response:
            chunks: list[str] = []
            for chunk in response.iter_text():
                chunks.append(chunk)
                if time.monotonic() > deadline:
                    raise VerificationRequestFailedError(
                        self.endpoint, f"timed out after {self.timeout}s"
                    )
        return "".join(chunks)


def submit_verification(
    params: FiscalParams,
    endpoint: str = VERIFY_INVOICE_URL,
    timeout: float = DEFAULT_TIMEOUT,
) -> str:
    """Submit fiscal parameters with a one-off client and return the raw response body."""
    return VerificationClient(endpoint=endpoint, timeout=timeout).submit(params)
