"""SQLAlchemy Base class for all models."""
from hostel_billing.models.base.base_model import Base


def import_models():
    """Import all models to register them with SQLAlchemy."""
    from hostel_billing.models.audit.bed_switch_audit import BedSwitchAudit  # noqa: F401
    from hostel_billing.models.fee_structure.fee_component import FeeComponent  # noqa: F401
    from hostel_billing.models.ledger.ledger_entry import LedgerEntry, LedgerSequence  # noqa: F401
    from hostel_billing.models.payment.payment import Payment  # noqa: F401
    from hostel_billing.models.room.bed import Bed  # noqa: F401
    from hostel_billing.models.room.room import Room  # noqa: F401
    from hostel_billing.models.room.room_occupancy import RoomOccupancy  # noqa: F401
    from hostel_billing.models.student.student import Student  # noqa: F401


# Import models on module load
import_models()
