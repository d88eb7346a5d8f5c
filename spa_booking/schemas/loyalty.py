from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from spa_booking.models.loyalty import LoyaltyRank


class LoyaltyPointsCreate(BaseModel):
    # Passed through uncoerced (no "5" -> 5, no true -> 1); LoyaltyService
    # rejects anything but a positive int with a 400.
    points: Any = Field(..., json_schema_extra={"type": "integer", "minimum": 1})
    reason: str = ""


class LoyaltyRankUpdate(BaseModel):
    rank: LoyaltyRank


class LoyaltyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: int
    points: int = Field(..., ge=0)
    rank: LoyaltyRank


class LoyaltyRankResponse(BaseModel):
    rank: LoyaltyRank
    points: int


class LoyaltyHistoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    points: int
    reason: str
    created_at: datetime


__all__ = [
    "LoyaltyPointsCreate",
    "LoyaltyRankUpdate",
    "LoyaltyResponse",
    "LoyaltyRankResponse",
    "LoyaltyHistoryResponse",
]
