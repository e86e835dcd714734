"""
Services package - Pipeline orchestration and external integrations.

Includes the tax authority verification client and the check URL service.
"""

from .fiscal_check import FiscalCheckResult, FiscalCheckService
from .verification import VerificationClient, submit_verification

__all__ = [
    "FiscalCheckResult",
    "FiscalCheckService",
    "VerificationClient",
    "submit_verification",
]
