"""Pydantic schemas for booking resources."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from spa_booking.models.booking import BookingStatus
from spa_booking.models.payment import PaymentMethod


class BookingCreate(BaseModel):
    """Schema used when creating a new booking.

    ``scheduled_at`` stays a string so malformed dates surface as a 400 from
    the booking service rather than a schema error.
    """

    spa_id: int = Field(..., gt=0)
    service_id: int = Field(..., gt=0)
    customer_id: Optional[int] = Field(None, gt=0)
    scheduled_at: str = Field(..., min_length=1)
    staff_id: Optional[int] = Field(None, gt=0)
    coupon_code: Optional[str] = Field(None, max_length=50)
    payment_method: Optional[PaymentMethod] = None


class BookingReschedule(BaseModel):
    scheduled_at: str = Field(..., min_length=1)


class RescheduleDecision(BaseModel):
    approved: bool


class BookingStatusUpdate(BaseModel):
    status: BookingStatus


class SpaSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    owner_id: int
    is_approved: bool


class ServiceSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    price: Decimal
    duration_minutes: int


class CustomerSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str


class StaffSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    is_active: bool


class AvailableStaffResponse(StaffSummary):
    spa_id: int


class PaymentSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    amount: Decimal
    method: PaymentMethod
    status: str
    commission_percent: Decimal
    commission_amount: Decimal
    transaction_reference: Optional[str] = None


class BookingResponse(BaseModel):
    """Booking data returned to API clients."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    scheduled_at: datetime
    requested_scheduled_at: Optional[datetime] = None
    status: BookingStatus
    total_price: Decimal
    final_price: Decimal
    commission_amount: Decimal
    coupon_code: Optional[str] = None
    created_at: Optional[datetime] = None
    spa: SpaSummary
    service: ServiceSummary
    customer: CustomerSummary
    staff: Optional[StaffSummary] = None
    payment: Optional[PaymentSummary] = None


__all__ = [
    "BookingCreate",
    "BookingReschedule",
    "RescheduleDecision",
    "BookingStatusUpdate",
    "BookingResponse",
    "AvailableStaffResponse",
    "CustomerSummary",
    "PaymentSummary",
    "ServiceSummary",
    "SpaSummary",
    "StaffSummary",
]
