"""
Pytest configuration and shared fixtures for the spa booking service tests.
"""

import os

# Must be set before spa_booking is imported so Settings picks them up.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ["ALGORITHM"] = "HS256"
os.environ["NOTIFICATION_SERVICE_URL"] = ""
os.environ["STRICT_STATUS_TRANSITIONS"] = "false"
os.environ["OPERATING_UTC_OFFSET_MINUTES"] = "0"

from datetime import datetime, time  # noqa: E402
from decimal import Decimal  # noqa: E402
from typing import Iterable, List, Optional, Sequence, Tuple  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from jose import jwt  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from spa_booking.core.database import Base  # noqa: E402
from spa_booking.models import (  # noqa: E402
    Coupon,
    Shift,
    ShiftDay,
    Spa,
    SpaService,
    Staff,
    SystemSetting,
    TimeOff,
    User,
)
from spa_booking.services.notification_client import NotificationClient  # noqa: E402

# 2030-01-02 is a Wednesday (weekday index 3).
WEDNESDAY = datetime(2030, 1, 2)
WEDNESDAY_INDEX = 3


class RecordingNotifier(NotificationClient):
    """Notification sink that keeps payloads in memory instead of calling HTTP."""

    def __init__(self, *, fail: bool = False) -> None:
        super().__init__(base_url="")
        self.sent: List[dict] = []
        self.fail = fail

    def send_notification(self, payload: dict) -> None:
        if self.fail:
            raise RuntimeError("notification service down")
        self.sent.append(payload)

    @property
    def messages(self) -> List[str]:
        return [payload["message"] for payload in self.sent]


class Seed:
    """Small factory for the rows the booking engine reads."""

    def __init__(self, db):
        self.db = db
        self._counter = 0

    def _next(self) -> int:
        self._counter += 1
        return self._counter

    def user(self, *, role: str = "customer", name: Optional[str] = None) -> User:
        number = self._next()
        user = User(
            name=name or f"{role.title()} {number}",
            email=f"{role}{number}@example.com",
            role=role,
        )
        self.db.add(user)
        self.db.commit()
        return user

    def spa(self, *, owner: Optional[User] = None, approved: bool = True) -> Spa:
        owner = owner or self.user(role="owner")
        spa = Spa(name=f"Spa {self._next()}", owner_id=owner.id, is_approved=approved)
        self.db.add(spa)
        self.db.commit()
        return spa

    def service(self, spa: Spa, *, price: str = "100.00") -> SpaService:
        service = SpaService(
            name=f"Massage {self._next()}",
            price=Decimal(price),
            duration_minutes=60,
            spa_id=spa.id,
        )
        self.db.add(service)
        self.db.commit()
        return service

    def staff(
        self,
        spa: Spa,
        *,
        shifts: Iterable[Tuple[Sequence[int], time, time]] = (
            ((WEDNESDAY_INDEX,), time(9, 0), time(17, 0)),
        ),
        time_off: Iterable[Tuple[datetime, datetime]] = (),
        active: bool = True,
    ) -> Staff:
        staff = Staff(name=f"Therapist {self._next()}", spa_id=spa.id, is_active=active)
        for weekdays, start, end in shifts:
            staff.shifts.append(
                Shift(
                    start_time=start,
                    end_time=end,
                    shift_days=[ShiftDay(weekday=day) for day in weekdays],
                )
            )
        for start_at, end_at in time_off:
            staff.time_off.append(TimeOff(start_at=start_at, end_at=end_at, reason="Leave"))
        self.db.add(staff)
        self.db.commit()
        return staff

    def coupon(
        self,
        code: str = "SPA20",
        *,
        discount: str = "20",
        active: bool = True,
        expires_at: Optional[datetime] = None,
        max_redemptions: Optional[int] = None,
        current_redemptions: int = 0,
    ) -> Coupon:
        coupon = Coupon(
            code=code,
            discount_percent=Decimal(discount),
            is_active=active,
            expires_at=expires_at,
            max_redemptions=max_redemptions,
            current_redemptions=current_redemptions,
        )
        self.db.add(coupon)
        self.db.commit()
        return coupon

    def setting(self, key: str, value: Optional[str]) -> SystemSetting:
        setting = SystemSetting(key=key, value=value)
        self.db.add(setting)
        self.db.commit()
        return setting


@pytest.fixture
def engine():
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seed(db):
    return Seed(db)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def client(session_factory, notifier):
    from spa_booking.dependencies import get_db, get_notification_client
    from spa_booking.main import app

    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_notification_client] = lambda: notifier

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _make(user: User, role: Optional[str] = None) -> dict:
        token = jwt.encode(
            {"sub": str(user.id), "role": role or user.role},
            os.environ["SECRET_KEY"],
            algorithm=os.environ["ALGORITHM"],
        )
        return {"Authorization": f"Bearer {token}"}

    return _make
