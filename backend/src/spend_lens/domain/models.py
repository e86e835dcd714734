"""
Domain models for fiscal check URLs.

Design Decisions:
- FiscalParams is a frozen dataclass: built once per verification attempt
  and consumed once by the verification client
- All three fields stay text. IIC is hex, TIN may carry leading zeros and
  CRTD is forwarded to the authority in its original textual form
"""

from dataclasses import dataclass
from enum import Enum


class TaxScheme(Enum):
    """Fiscalization schemes recognised from a check URL origin."""
    MONTENEGRO = "me"
    SERBIA = "rs"


class FiscalField(Enum):
    """Query parameters attested by a check URL."""
    IIC = "iic"
    TIN = "tin"
    CRTD = "crtd"


@dataclass(frozen=True)
class FiscalParams:
    """
    The three values a receipt's check URL attests to.

    Attributes:
        iic: 32 hex character invoice identification code
        tin: 8 digit tax number of the issuer
        crtd: invoice creation timestamp, as written in the URL
    """
    iic: str
    tin: str
    crtd: str
