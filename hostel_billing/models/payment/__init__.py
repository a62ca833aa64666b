"""Payment models."""

from hostel_billing.models.payment.payment import Payment

__all__ = ["Payment"]
