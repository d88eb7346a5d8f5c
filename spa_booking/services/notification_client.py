"""HTTP client for the notification microservice."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from spa_booking.core.config import settings

logger = logging.getLogger(__name__)

CHANNEL_PUSH = "PUSH"


class NotificationClient:
    """Send customer notifications; transport failures are logged, not raised."""

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        configured_base = settings.NOTIFICATION_SERVICE_URL if base_url is None else base_url
        self._base_url = configured_base.rstrip("/") if configured_base else ""
        self._timeout = timeout or settings.NOTIFICATION_SERVICE_TIMEOUT

    @property
    def is_configured(self) -> bool:
        return bool(self._base_url)

    def send_notification(self, payload: Dict[str, Any]) -> None:
        if not self.is_configured:
            logger.info("Notification service URL not configured; skipping notification")
            return

        url = f"{self._base_url}/api/spa/v1/notification/notifications/send"

        try:
            response = httpx.post(url, json=payload, timeout=self._timeout)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:  # pragma: no cover - network dependent
            logger.warning(
                "Notification service returned HTTP %s for customer %s: %s",
                exc.response.status_code,
                payload.get("customer_id"),
                exc.response.text,
            )
        except httpx.RequestError as exc:  # pragma: no cover - network dependent
            logger.warning("Failed to reach notification service: %s", exc)


def build_notification(
    customer_id: int,
    message: str,
    *,
    channel: str = CHANNEL_PUSH,
    **meta: Any,
) -> Dict[str, Any]:
    return {
        "customer_id": customer_id,
        "channel": channel,
        "message": message,
        "meta": meta,
    }


__all__ = ["CHANNEL_PUSH", "NotificationClient", "build_notification"]
