"""Fee structure repositories."""

from hostel_billing.repositories.fee_structure.fee_component_repository import FeeComponentRepository

__all__ = ["FeeComponentRepository"]
