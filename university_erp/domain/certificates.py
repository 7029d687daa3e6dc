"""Certificate request workflow rules and identifier generation"""

import random
import secrets
from datetime import date

from university_erp.domain.exceptions import ValidationError

CERTIFICATE_TYPES = ("degree", "transcript", "character", "migration", "enrollment", "provisional")
DELIVERY_METHODS = ("pickup", "postal", "email")


def generate_verification_code() -> str:
    """VER- followed by 16 uppercase hex characters"""
    return f"VER-{secrets.token_hex(8).upper()}"


def generate_certificate_number(issue_date: date) -> str:
    """CERT-YYYY-MMDD-NNNNN derived from the issue date"""
    return f"CERT-{issue_date:%Y}-{issue_date:%m%d}-{random.randint(0, 99999):05d}"


def fee_outstanding(fee_amount: float, fee_paid: bool) -> bool:
    return (fee_amount or 0) > 0 and not fee_paid


def ensure_can_decide(status: str, decision: str, fee_amount: float, fee_paid: bool, rejection_reason: str = None) -> None:
    """Only pending requests can be approved or rejected"""
    if status != "pending":
        raise ValidationError(f"Only pending requests can be {decision}")
    if decision == "approved" and fee_outstanding(fee_amount, fee_paid):
        raise ValidationError("Certificate fee must be paid before approval")
    if decision == "rejected" and not rejection_reason:
        raise ValidationError("Rejection reason is required")


def ensure_can_process(status: str, fee_amount: float, fee_paid: bool) -> None:
    if status != "approved":
        raise ValidationError("Certificate request must be approved before processing")
    if fee_outstanding(fee_amount, fee_paid):
        raise ValidationError("Certificate fee must be paid before processing")
