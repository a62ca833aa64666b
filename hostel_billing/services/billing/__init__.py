"""
Billing Service Layer

- Checkout settlement calculation and processing
- Bed switch with rate adjustment
- Room occupancy resynchronization
"""

from hostel_billing.services.billing.occupancy_sync_service import OccupancySyncService
from hostel_billing.services.billing.checkout_settlement_service import CheckoutSettlementService
from hostel_billing.services.billing.bed_switch_service import BedSwitchService

__all__ = [
    "BedSwitchService",
    "CheckoutSettlementService",
    "OccupancySyncService",
]
