"""
Notification dispatcher for billing events.

Delivery itself belongs to the notification subsystem; the dispatcher builds
the event and hands it to a sender callable. Dispatch is best-effort: it
returns a ServiceResult and never raises.
"""

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Deque, Dict, List, Optional

from hostel_billing.config.settings import settings
from hostel_billing.core.logging import get_logger
from hostel_billing.services.base.service_result import (
    ErrorCode,
    ErrorSeverity,
    ServiceError,
    ServiceResult,
)


class NotificationPriority(str, Enum):
    """Notification priority levels."""

    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


class BillingEvent(str, Enum):
    """Billing events that produce notifications."""

    SETTLEMENT_PROCESSED = "settlement_processed"
    BED_SWITCHED = "bed_switched"


@dataclass
class BillingNotification:
    event_type: BillingEvent
    recipient_id: str
    payload: Dict[str, Any]
    priority: NotificationPriority = NotificationPriority.NORMAL
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


Sender = Callable[[BillingNotification], Any]


class NotificationDispatcher:
    """
    Hand billing notifications to a delivery callable.

    Without a sender, the most recent notifications are kept in `sent` so
    callers and tests can inspect what would have been delivered. Nothing is
    kept once a sender is configured.
    """

    RECORD_LIMIT = 100

    def __init__(self, sender: Optional[Sender] = None, enabled: Optional[bool] = None):
        self._sender = sender
        self._enabled = settings.ENABLE_BILLING_NOTIFICATIONS if enabled is None else enabled
        self._recorded: Deque[BillingNotification] = deque(maxlen=self.RECORD_LIMIT)
        self._logger = get_logger(self.__class__.__name__)

    @property
    def sent(self) -> List[BillingNotification]:
        """Undelivered notifications, oldest first."""
        return list(self._recorded)

    def dispatch(
        self,
        event_type: BillingEvent,
        recipient_id: str,
        payload: Dict[str, Any],
        priority: NotificationPriority = NotificationPriority.NORMAL,
    ) -> ServiceResult[BillingNotification]:
        """
        Dispatch one notification.

        Returns:
            ServiceResult with the notification, or a failure carrying the
            sender's error
        """
        if not self._enabled:
            return ServiceResult.success(message="Billing notifications disabled")

        notification = BillingNotification(
            event_type=event_type,
            recipient_id=recipient_id,
            payload=payload,
            priority=priority,
        )

        try:
            if self._sender is None:
                self._recorded.append(notification)
            else:
                self._sender(notification)
        except Exception as e:
            self._logger.error(
                f"Failed to dispatch {event_type.value} notification: {e}",
                exc_info=True,
                extra={"event_type": event_type.value, "recipient_id": recipient_id},
            )
            return ServiceResult.failure(
                ServiceError(
                    code=ErrorCode.EXTERNAL_SERVICE_ERROR,
                    message=f"Notification delivery failed: {e}",
                    severity=ErrorSeverity.WARNING,
                    details={"event_type": event_type.value, "recipient_id": recipient_id},
                )
            )

        self._logger.info(
            f"Notification dispatched: {event_type.value} to {recipient_id}",
            extra={
                "event_type": event_type.value,
                "recipient_id": recipient_id,
                "priority": priority.value,
            },
        )
        return ServiceResult.success(notification, message="Notification dispatched")


__all__ = [
    "BillingEvent",
    "BillingNotification",
    "NotificationDispatcher",
    "NotificationPriority",
]
