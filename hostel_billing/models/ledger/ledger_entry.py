"""
Ledger models.

Double-entry style student ledger. Each entry moves money in exactly one
direction (debit or credit). Entries are never deleted; a reversed entry
is flagged and dropped from balance computation.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    Enum as SQLEnum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from hostel_billing.models.base.base_model import Base, TimestampModel
from hostel_billing.models.base.enums import LedgerEntryType

__all__ = ["LedgerEntry", "LedgerSequence"]


class LedgerEntry(TimestampModel):
    """
    Ledger entry for a student account.

    Positive balance (debits over credits) is owed by the student;
    negative balance is credit or advance held for the student.
    """

    __tablename__ = "ledger_entries"
    __table_args__ = (
        CheckConstraint("debit >= 0 AND credit >= 0", name="ck_ledger_amounts_non_negative"),
        CheckConstraint(
            "(debit > 0 AND credit = 0) OR (credit > 0 AND debit = 0)",
            name="ck_ledger_single_direction",
        ),
        Index("ix_ledger_student_reversed", "student_id", "is_reversed"),
        Index("ix_ledger_hostel_sequence", "hostel_id", "entry_sequence", unique=True),
    )

    # ==================== Foreign Keys ====================
    student_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
    )
    hostel_id: Mapped[str] = mapped_column(String(36), nullable=False)

    # ==================== Entry Details ====================
    entry_date: Mapped[date] = mapped_column(Date, nullable=False)
    entry_type: Mapped[LedgerEntryType] = mapped_column(
        SQLEnum(LedgerEntryType, name="ledger_entry_type_enum"),
        nullable=False,
        index=True,
    )
    debit: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=False,
        default=Decimal("0.00"),
    )
    credit: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=False,
        default=Decimal("0.00"),
    )
    description: Mapped[str] = mapped_column(String(500), nullable=False)
    reference_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        nullable=True,
        comment="Payment or audit record this entry belongs to",
    )
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    entry_sequence: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Monotonic per hostel",
    )

    # ==================== Reversal ====================
    is_reversed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    reversed_by: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    reversal_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    reversal_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    @property
    def net_amount(self) -> Decimal:
        return self.debit - self.credit


class LedgerSequence(Base):
    """Per-hostel counter issuing ledger entry sequence numbers."""

    __tablename__ = "ledger_sequences"

    hostel_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    last_value: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
