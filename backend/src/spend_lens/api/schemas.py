"""
Pydantic schemas for API request/response validation.

These schemas define the contract between clients and the backend.
Fiscal values stay strings end to end.
"""

from enum import Enum

from pydantic import BaseModel, Field


class TaxSchemeEnum(str, Enum):
    """Fiscalization scheme of a check URL."""
    MONTENEGRO = "me"
    SERBIA = "rs"


# =============================================================================
# Request Schemas
# =============================================================================

class CheckUrlRequest(BaseModel):
    """A check URL as scanned from a receipt QR code."""
    url: str = Field(
        ...,
        min_length=1,
        description="Check URL, percent-encoded or already decoded",
    )


class FiscalParamsRequest(BaseModel):
    """Fiscal parameters supplied directly by the caller."""
    iic: str = Field(..., description="Invoice identification code (32 hex characters)")
    tin: str = Field(..., description="Issuer tax number (8 digits)")
    crtd: str = Field(..., description="Invoice creation timestamp")


# =============================================================================
# Response Schemas
# =============================================================================

class ValidationResponse(BaseModel):
    """Outcome of a successful check URL validation."""
    valid: bool = True
    scheme: TaxSchemeEnum


class FiscalParamsResponse(BaseModel):
    """Fiscal parameters extracted from a check URL."""
    iic: str
    tin: str
    crtd: str


class VerificationResponse(BaseModel):
    """
    Result of submitting a check to the tax authority.

    response_text is the authority's body, untouched.
    """
    params: FiscalParamsResponse
    response_text: str


class ErrorDetail(BaseModel):
    """Machine-readable error returned for rejected checks."""
    code: str
    message: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    environment: str
