"""Audit models."""

from hostel_billing.models.audit.bed_switch_audit import BedSwitchAudit

__all__ = ["BedSwitchAudit"]
