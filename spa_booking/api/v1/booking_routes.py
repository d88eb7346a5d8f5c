"""API routes for creating and managing bookings."""

from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from spa_booking.core.security import (
    ROLE_ADMIN,
    ROLE_OWNER,
    CurrentUser,
    get_current_user,
    require_roles,
)
from spa_booking.dependencies import get_db, get_notification_client
from spa_booking.schemas.booking import (
    AvailableStaffResponse,
    BookingCreate,
    BookingReschedule,
    BookingResponse,
    BookingStatusUpdate,
    RescheduleDecision,
)
from spa_booking.models.booking import BookingStatus
from spa_booking.services.booking_lifecycle import (
    BookingLifecycle,
    RescheduleActor,
    RescheduleRequest,
)
from spa_booking.services.booking_service import BookingService
from spa_booking.services.notification_client import NotificationClient

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post("/", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def create_booking(
    payload: BookingCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
    notifier: NotificationClient = Depends(get_notification_client),
) -> BookingResponse:
    """Book a spa service. Customers always book for themselves."""

    if current_user.is_customer:
        payload = payload.model_copy(update={"customer_id": current_user.id})
    elif payload.customer_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="customer_id is required when booking on behalf of a customer.",
        )

    service = BookingService(db, notifier=notifier, background_tasks=background_tasks)
    return service.create_booking(payload)


@router.get("/", response_model=List[BookingResponse])
def list_bookings(
    *,
    db: Session = Depends(get_db),
    status_filter: Optional[BookingStatus] = Query(
        None, alias="status", description="Filter bookings by status"
    ),
    _: CurrentUser = Depends(require_roles(ROLE_ADMIN)),
) -> List[BookingResponse]:
    """Retrieve every booking, newest first."""

    service = BookingService(db)
    return service.list_bookings(
        status_filter=status_filter.value if status_filter is not None else None
    )


@router.get("/me", response_model=List[BookingResponse])
def list_my_bookings(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> List[BookingResponse]:
    service = BookingService(db)
    return service.list_customer_bookings(current_user.id)


@router.get("/owner", response_model=List[BookingResponse])
def list_owner_bookings(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_roles(ROLE_OWNER)),
) -> List[BookingResponse]:
    """Retrieve bookings for every spa owned by the caller."""

    service = BookingService(db)
    return service.list_owner_bookings(current_user.id)


@router.get("/available-staff/{spa_id}", response_model=List[AvailableStaffResponse])
def list_available_staff(
    spa_id: int,
    *,
    scheduled_at: Optional[str] = Query(None, description="ISO 8601 instant to check"),
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
) -> List[AvailableStaffResponse]:
    service = BookingService(db)
    return service.list_available_staff(spa_id, scheduled_at)


@router.get("/{booking_id}", response_model=BookingResponse)
def get_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
) -> BookingResponse:
    service = BookingService(db)
    return service.get_booking(booking_id)


@router.patch("/{booking_id}/reschedule", response_model=BookingResponse)
def reschedule_booking(
    booking_id: int,
    payload: BookingReschedule,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
    notifier: NotificationClient = Depends(get_notification_client),
) -> BookingResponse:
    """A booking's own customer only requests a new time; owners and admins move it."""

    actor = RescheduleActor.CUSTOMER if current_user.is_customer else RescheduleActor.OWNER_OR_ADMIN
    lifecycle = BookingLifecycle(db, notifier=notifier, background_tasks=background_tasks)
    return lifecycle.reschedule(
        booking_id,
        RescheduleRequest(
            scheduled_at=payload.scheduled_at,
            actor=actor,
            requester_id=current_user.id,
        ),
    )


@router.patch("/{booking_id}/reschedule/respond", response_model=BookingResponse)
def respond_to_reschedule(
    booking_id: int,
    payload: RescheduleDecision,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_roles(ROLE_OWNER, ROLE_ADMIN)),
    notifier: NotificationClient = Depends(get_notification_client),
) -> BookingResponse:
    lifecycle = BookingLifecycle(db, notifier=notifier, background_tasks=background_tasks)
    return lifecycle.respond_to_reschedule(booking_id, payload.approved, current_user.id)


@router.patch("/{booking_id}/cancel", response_model=BookingResponse)
def cancel_booking(
    booking_id: int,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
    notifier: NotificationClient = Depends(get_notification_client),
) -> BookingResponse:
    lifecycle = BookingLifecycle(db, notifier=notifier, background_tasks=background_tasks)
    return lifecycle.cancel(booking_id)


@router.patch("/{booking_id}/status", response_model=BookingResponse)
def update_booking_status(
    booking_id: int,
    payload: BookingStatusUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(require_roles(ROLE_OWNER, ROLE_ADMIN)),
    notifier: NotificationClient = Depends(get_notification_client),
) -> BookingResponse:
    lifecycle = BookingLifecycle(db, notifier=notifier, background_tasks=background_tasks)
    return lifecycle.update_status(booking_id, payload.status)
