"""
Fee Structure Service Layer

- Monthly fee resolution from active fee components
- Fee component creation and supersession
- Prorated usage across partial calendar months
"""

from hostel_billing.services.fee_structure.fee_configuration_service import FeeConfigurationService
from hostel_billing.services.fee_structure.proration_service import ProrationService

__all__ = [
    "FeeConfigurationService",
    "ProrationService",
]
