"""Shared test fixtures for the Spend Lens test suite.

Provides sample check URLs from real receipts and an httpx mock transport
standing in for the tax authority's verification endpoint.
"""

from typing import Callable

import httpx
import pytest

from spend_lens.config import get_settings
from spend_lens.services.verification import VerificationClient


IIC = "CDDDFEDA791C81615A66FFD8824ACFE0"
TIN = "02404281"
CRTD = "2023-02-11T18:27:35+01:00"

MAPR_CHECK_URL = (
    "https://mapr.tax.gov.me/ic/#/verify/?iic=CDDDFEDA791C81615A66FFD8824ACFE0"
    "&tin=02404281&crtd=2023-02-11T18:27:35+01:00&ord=1973&bu=gt860be150"
    "&cr=wn519mv937&sw=ti937tv565&prc=514.00"
)

IP_CHECK_URL = (
    "https://213.149.97.151/ic/#/verify/?iic=CDDDFEDA791C81615A66FFD8824ACFE0"
    "&tin=02404281&crtd=2023-02-11T18:27:35+01:00&ord=1973&bu=gt860be150"
    "&cr=wn519mv937&sw=ti937tv565&prc=514.00"
)

ENCODED_CHECK_URL = (
    "https://mapr.tax.gov.me/ic/#/verify?iic=569b2a25e33a44c5b755a5565dee180d"
    "&tin=03320758&crtd=2023-02-09T13%3A25%3A58%2B01%3A00&ord=59&bu=rf895ij778"
    "&cr=lx211ol284&sw=gg387fl042&prc=50.00"
)

SERBIAN_CHECK_URL = "https://suf.purs.gov.rs/v/"


def make_check_url(
    iic: str = IIC,
    tin: str = TIN,
    crtd: str = CRTD,
    origin: str = "https://mapr.tax.gov.me",
) -> str:
    """Build a fragment-style check URL with the given parameters."""
    return f"{origin}/ic/#/verify/?iic={iic}&tin={tin}&crtd={crtd}&ord=1973"


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make every test read settings from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class AuthorityTransport(httpx.MockTransport):
    """Mock verification endpoint recording every request it receives."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response] | None = None):
        self.requests: list[httpx.Request] = []
        self._respond = handler or (lambda request: httpx.Response(200, text='{"status": "ok"}'))
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        return self._respond(request)


@pytest.fixture
def authority() -> AuthorityTransport:
    """Transport answering 200 with a small JSON body."""
    return AuthorityTransport()


@pytest.fixture
def verification_client(authority: AuthorityTransport):
    """VerificationClient wired to the mock authority."""
    with httpx.Client(transport=authority) as client:
        yield VerificationClient(client=client)
