"""Fee structure models."""

from hostel_billing.models.fee_structure.fee_component import FeeComponent

__all__ = ["FeeComponent"]
