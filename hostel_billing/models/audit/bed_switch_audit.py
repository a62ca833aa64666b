"""
Bed switch audit model.

Immutable record of every bed switch with the rates and ledger balances
observed at the time of the switch.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional

from sqlalchemy import JSON, Date, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from hostel_billing.models.base.base_model import TimestampModel

__all__ = ["BedSwitchAudit"]


class BedSwitchAudit(TimestampModel):
    """Financial snapshot taken when a student moves between beds."""

    __tablename__ = "bed_switch_audits"

    student_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # ==================== Placement ====================
    from_bed_id: Mapped[str] = mapped_column(String(36), nullable=False)
    to_bed_id: Mapped[str] = mapped_column(String(36), nullable=False)
    from_room_id: Mapped[str] = mapped_column(String(36), nullable=False)
    to_room_id: Mapped[str] = mapped_column(String(36), nullable=False)

    # ==================== Rates ====================
    old_rate: Mapped[Decimal] = mapped_column(Numeric(precision=12, scale=2), nullable=False)
    new_rate: Mapped[Decimal] = mapped_column(Numeric(precision=12, scale=2), nullable=False)
    rate_difference: Mapped[Decimal] = mapped_column(Numeric(precision=12, scale=2), nullable=False)

    # ==================== Balances ====================
    old_balance: Mapped[Decimal] = mapped_column(Numeric(precision=12, scale=2), nullable=False)
    new_balance: Mapped[Decimal] = mapped_column(Numeric(precision=12, scale=2), nullable=False)
    advance_adjustment: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=False,
        comment="old_balance - new_balance",
    )

    switch_date: Mapped[date] = mapped_column(Date, nullable=False)
    reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    approved_by: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    financial_snapshot: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSON, nullable=True)
