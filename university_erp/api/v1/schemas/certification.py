"""Schemas for certificate requests, issuance and verification"""

import uuid
from datetime import date, datetime
from typing import Literal, Optional

from pydantic import Field, model_validator

from university_erp.api.v1.schemas.common import CamelModel

CertificateType = Literal["degree", "transcript", "character", "migration", "enrollment", "provisional"]
DeliveryMethod = Literal["pickup", "postal", "email"]


class CertificateRequestCreate(CamelModel):
    student_id: uuid.UUID
    certificate_type: CertificateType
    purpose: Optional[str] = None
    delivery_method: DeliveryMethod = "pickup"
    delivery_address: Optional[str] = None
    fee_amount: int = Field(0, ge=0)
    fee_paid: bool = False

    @model_validator(mode="after")
    def address_for_postal(self):
        if self.delivery_method == "postal" and not self.delivery_address:
            raise ValueError("Delivery address is required for postal delivery")
        return self


class CertificateDecision(CamelModel):
    status: Literal["approved", "rejected"]
    rejection_reason: Optional[str] = None
    remarks: Optional[str] = None


class ProcessCertificateRequest(CamelModel):
    issue_date: Optional[date] = None
    remarks: Optional[str] = None


class CertificateRequestSchema(CamelModel):
    id: uuid.UUID
    student_id: uuid.UUID
    certificate_type: str
    purpose: Optional[str] = None
    delivery_method: str
    delivery_address: Optional[str] = None
    fee_amount: int
    fee_paid: bool
    fee_payment_date: Optional[datetime] = None
    status: str
    approved_by: Optional[uuid.UUID] = None
    approved_at: Optional[datetime] = None
    processed_by: Optional[uuid.UUID] = None
    processed_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    remarks: Optional[str] = None
    created_at: Optional[datetime] = None


class CertificateSchema(CamelModel):
    id: uuid.UUID
    certificate_request_id: uuid.UUID
    student_id: uuid.UUID
    certificate_type: str
    certificate_number: str
    verification_code: str
    issue_date: date
    student_name: str
    issued_by: Optional[uuid.UUID] = None


class VerifyRequest(CamelModel):
    verification_code: Optional[str] = None
    certificate_number: Optional[str] = None


class VerificationSchema(CamelModel):
    is_valid: bool
    message: Optional[str] = None
    certificate: Optional[CertificateSchema] = None
    certificate_type: Optional[str] = None
    issue_date: Optional[date] = None
    student_name: Optional[str] = None
