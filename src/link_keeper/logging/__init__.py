"""Structured request audit trail."""

from .audit import AuditRecord, AuditTrail, utc_now

__all__ = ["AuditRecord", "AuditTrail", "utc_now"]
