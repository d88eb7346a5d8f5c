from fastapi import APIRouter

from .booking_routes import router as booking_router
from .loyalty_routes import router as loyalty_router

router = APIRouter()
router.include_router(booking_router)
router.include_router(loyalty_router)

__all__ = ["router", "booking_router", "loyalty_router"]
