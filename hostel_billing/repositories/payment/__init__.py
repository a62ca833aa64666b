"""Payment repositories."""

from hostel_billing.repositories.payment.payment_repository import PaymentRepository

__all__ = ["PaymentRepository"]
