"""Coupon redemption, final price and platform commission."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Callable, Optional

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from spa_booking.core.timeutils import operating_now
from spa_booking.repository import coupon_repository, setting_repository

logger = logging.getLogger(__name__)

COMMISSION_RATE_SETTING = "commission_rate"
DEFAULT_COMMISSION_RATE = Decimal("15")

_CENT = Decimal("0.01")
_HUNDRED = Decimal("100")

CommissionRateProvider = Callable[[], Optional[Decimal]]


def round_money(value: Decimal) -> Decimal:
    return Decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP)


def apply_discount(amount: Decimal, discount_percent: Decimal) -> Decimal:
    if not discount_percent:
        return round_money(amount)
    return round_money(Decimal(amount) * (_HUNDRED - Decimal(discount_percent)) / _HUNDRED)


def calculate_commission(final_price: Decimal, rate_percent: Decimal) -> Decimal:
    return round_money(Decimal(final_price) * Decimal(rate_percent) / _HUNDRED)


@dataclass(frozen=True)
class PriceQuote:
    final_price: Decimal
    discount_percent: Decimal


class SettingsCommissionProvider:
    """Read ``commission_rate`` (a percentage) from the system settings table.

    Returns ``None`` when the setting is missing, unparsable, out of range or
    cannot be read.
    """

    def __init__(self, db: Session):
        self.db = db

    def __call__(self) -> Optional[Decimal]:
        try:
            raw_value = setting_repository.get_setting_value(self.db, COMMISSION_RATE_SETTING)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.warning("Could not read %s setting: %s", COMMISSION_RATE_SETTING, exc)
            return None

        if raw_value is None or not str(raw_value).strip():
            return None

        try:
            rate = Decimal(str(raw_value).strip())
        except InvalidOperation:
            logger.warning("Ignoring unparsable %s setting: %r", COMMISSION_RATE_SETTING, raw_value)
            return None

        if not rate.is_finite() or rate < 0 or rate > _HUNDRED:
            logger.warning("Ignoring out of range %s setting: %s", COMMISSION_RATE_SETTING, rate)
            return None
        return rate


class PricingEngine:
    def __init__(
        self,
        db: Session,
        *,
        commission_provider: Optional[CommissionRateProvider] = None,
    ):
        self.db = db
        self._commission_provider = commission_provider or SettingsCommissionProvider(db)

    def commission_rate(self) -> Decimal:
        """Configured commission percentage, or ``DEFAULT_COMMISSION_RATE``."""

        rate = self._commission_provider()
        if rate is None:
            logger.warning(
                "Commission rate not configured; using default of %s%%", DEFAULT_COMMISSION_RATE
            )
            return DEFAULT_COMMISSION_RATE
        return rate

    def price(
        self,
        base_price: Decimal,
        coupon_code: Optional[str] = None,
        *,
        now: Optional[datetime] = None,
    ) -> PriceQuote:
        """Price a booking, redeeming ``coupon_code`` when given.

        The redemption counter is flushed but not committed; the caller owns the
        transaction.
        """

        base_price = Decimal(base_price)
        if not coupon_code:
            return PriceQuote(final_price=round_money(base_price), discount_percent=Decimal("0"))

        coupon = coupon_repository.get_coupon_by_code(self.db, coupon_code, for_update=True)
        if coupon is None or not coupon.is_active:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Coupon is not available.",
            )

        current_time = now or operating_now()
        if coupon.expires_at is not None and coupon.expires_at <= current_time:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Coupon expired.",
            )

        redemptions = coupon.current_redemptions or 0
        if coupon.max_redemptions and redemptions >= coupon.max_redemptions:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Coupon redemption limit reached.",
            )

        coupon_repository.increment_redemptions(self.db, coupon)

        discount_percent = Decimal(coupon.discount_percent)
        return PriceQuote(
            final_price=apply_discount(base_price, discount_percent),
            discount_percent=discount_percent,
        )


__all__ = [
    "COMMISSION_RATE_SETTING",
    "DEFAULT_COMMISSION_RATE",
    "CommissionRateProvider",
    "PriceQuote",
    "PricingEngine",
    "SettingsCommissionProvider",
    "apply_discount",
    "calculate_commission",
    "round_money",
]
