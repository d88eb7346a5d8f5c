"""API routes for customer loyalty balances."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from spa_booking.core.security import ROLE_ADMIN, CurrentUser, get_current_user, require_roles
from spa_booking.dependencies import get_db
from spa_booking.schemas.loyalty import (
    LoyaltyHistoryResponse,
    LoyaltyPointsCreate,
    LoyaltyRankResponse,
    LoyaltyRankUpdate,
    LoyaltyResponse,
)
from spa_booking.services.loyalty_service import LoyaltyService

router = APIRouter(prefix="/loyalty", tags=["loyalty"])


def _ensure_can_view(current_user: CurrentUser, customer_id: int) -> None:
    if current_user.is_customer and current_user.id != customer_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only view your own loyalty information.",
        )


@router.post(
    "/{customer_id}/points",
    response_model=LoyaltyResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_points(
    customer_id: int,
    payload: LoyaltyPointsCreate,
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(require_roles(ROLE_ADMIN)),
) -> LoyaltyResponse:
    """Credit loyalty points to a customer."""

    service = LoyaltyService(db)
    return service.add_points(customer_id, payload.points, payload.reason)


@router.get("/{customer_id}/rank", response_model=LoyaltyRankResponse)
def get_rank(
    customer_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> LoyaltyRankResponse:
    _ensure_can_view(current_user, customer_id)
    rank, points = LoyaltyService(db).get_rank(customer_id)
    return LoyaltyRankResponse(rank=rank, points=points)


@router.get("/{customer_id}/history", response_model=List[LoyaltyHistoryResponse])
def get_history(
    customer_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> List[LoyaltyHistoryResponse]:
    _ensure_can_view(current_user, customer_id)
    return LoyaltyService(db).get_history(customer_id)


@router.put("/{customer_id}/rank", response_model=LoyaltyResponse)
def update_rank(
    customer_id: int,
    payload: LoyaltyRankUpdate,
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(require_roles(ROLE_ADMIN)),
) -> LoyaltyResponse:
    service = LoyaltyService(db)
    return service.update_rank(customer_id, payload.rank)
