"""
Fiscal check endpoints.

Validate a scanned check URL, extract its parameters, and forward them to
the tax authority. Handlers are sync: the verification call blocks and
FastAPI runs it in the threadpool.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from spend_lens.api.schemas import (
    CheckUrlRequest,
    ErrorDetail,
    FiscalParamsRequest,
    FiscalParamsResponse,
    TaxSchemeEnum,
    ValidationResponse,
    VerificationResponse,
)
from spend_lens.config import get_settings
from spend_lens.domain.errors import CheckUrlError, FiscalCheckError, VerificationRequestFailedError
from spend_lens.domain.models import FiscalParams
from spend_lens.services.fiscal_check import FiscalCheckResult, FiscalCheckService
from spend_lens.services.verification import VerificationClient

router = APIRouter(prefix="/checks", tags=["checks"])

ERROR_RESPONSES = {
    422: {"model": ErrorDetail, "description": "Check URL rejected"},
}


# Service instance (overridden via dependency_overrides in tests)
_fiscal_check_service: FiscalCheckService | None = None


def get_fiscal_check_service() -> FiscalCheckService:
    """Get or create fiscal check service instance."""
    global _fiscal_check_service
    if _fiscal_check_service is None:
        settings = get_settings()
        _fiscal_check_service = FiscalCheckService(
            VerificationClient(
                endpoint=settings.verification_url,
                timeout=settings.verification_timeout,
            )
        )
    return _fiscal_check_service


ServiceDep = Annotated[FiscalCheckService, Depends(get_fiscal_check_service)]


def _http_error(error: FiscalCheckError) -> HTTPException:
    """Map a pipeline error to an HTTP error carrying its code."""
    if isinstance(error, VerificationRequestFailedError):
        status_code = 502
    elif isinstance(error, CheckUrlError):
        status_code = 422
    else:
        status_code = 500

    return HTTPException(
        status_code=status_code,
        detail=ErrorDetail(code=error.code, message=error.message).model_dump(),
    )


def _verification_response(result: FiscalCheckResult) -> VerificationResponse:
    return VerificationResponse(
        params=FiscalParamsResponse(
            iic=result.params.iic,
            tin=result.params.tin,
            crtd=result.params.crtd,
        ),
        response_text=result.response_text,
    )


@router.post("/validate", response_model=ValidationResponse, responses=ERROR_RESPONSES)
def validate_check(request: CheckUrlRequest, service: ServiceDep) -> ValidationResponse:
    """
    Validate a check URL.

    Accepts only tax authority origins and URLs carrying well-formed
    iic, tin and crtd parameters.
    """
    try:
        scheme = service.validate(request.url)
    except CheckUrlError as e:
        raise _http_error(e)

    return ValidationResponse(scheme=TaxSchemeEnum(scheme.value))


@router.post("/extract", response_model=FiscalParamsResponse, responses=ERROR_RESPONSES)
def extract_check_params(request: CheckUrlRequest, service: ServiceDep) -> FiscalParamsResponse:
    """Extract fiscal parameters from the fragment of a check URL."""
    try:
        params = service.extract(request.url)
    except CheckUrlError as e:
        raise _http_error(e)

    return FiscalParamsResponse(iic=params.iic, tin=params.tin, crtd=params.crtd)


@router.post(
    "/verify",
    response_model=VerificationResponse,
    responses={
        **ERROR_RESPONSES,
        502: {"model": ErrorDetail, "description": "Tax authority unreachable"},
    },
)
def verify_check(request: CheckUrlRequest, service: ServiceDep) -> VerificationResponse:
    """
    Validate a check URL and submit it to the tax authority.

    **Process:**
    1. Validate origin and parameter formats
    2. Extract parameters from the URL fragment
    3. Post them to the authority and return its answer verbatim
    """
    try:
        result = service.verify(request.url)
    except FiscalCheckError as e:
        raise _http_error(e)

    return _verification_response(result)


@router.post(
    "/submit",
    response_model=VerificationResponse,
    responses={502: {"model": ErrorDetail, "description": "Tax authority unreachable"}},
)
def submit_check(request: FiscalParamsRequest, service: ServiceDep) -> VerificationResponse:
    """Submit fiscal parameters the caller already holds."""
    params = FiscalParams(iic=request.iic, tin=request.tin, crtd=request.crtd)
    try:
        result = service.submit(params)
    except VerificationRequestFailedError as e:
        raise _http_error(e)

    return _verification_response(result)
