"""Audit repositories."""

from hostel_billing.repositories.audit.bed_switch_audit_repository import BedSwitchAuditRepository

__all__ = ["BedSwitchAuditRepository"]
