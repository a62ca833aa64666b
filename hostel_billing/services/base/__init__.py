"""
Base service components for the billing engine.

- Result handling via ServiceResult for best-effort operations
- Notification dispatch after commit
"""

from hostel_billing.services.base.service_result import (
    ServiceResult,
    ServiceError,
    ErrorCode,
    ErrorSeverity,
)

from hostel_billing.services.base.notification_dispatcher import (
    BillingEvent,
    BillingNotification,
    NotificationDispatcher,
    NotificationPriority,
)

__all__ = [
    "ServiceResult",
    "ServiceError",
    "ErrorCode",
    "ErrorSeverity",
    "BillingEvent",
    "BillingNotification",
    "NotificationDispatcher",
    "NotificationPriority",
]
