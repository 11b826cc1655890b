"""
Audit logging for state-changing operations.

Every mutation of the catalog, the sale ledger, the purchase orders and the
scheduling collections is written as one JSON line to the "audit" logger, so
stock movements can be reconstructed from the log when the ledger and the
catalog are questioned.

Credentials are never included in log entries.
"""
import logging
import json
from datetime import datetime, timezone
from typing import Any, Optional, Dict

# Separate logger for audit events (can be shipped to centralized logging)
audit_logger = logging.getLogger("audit")


class AuditLog:
    """Central audit logging for clinic events."""

    @staticmethod
    def log_action(
        action: str,  # "create", "update", "delete", "adjust_stock", "status"
        resource_type: str,  # "medicine", "sale", "appointment", "purchase_order", ...
        resource_id: str,
        changes: Optional[Dict[str, Any]] = None,
    ):
        """
        Log a mutation of one record.

        Usage:
            AuditLog.log_action("create", "sale", "sale-3f9a", changes={"quantity": 10})
            AuditLog.log_action("adjust_stock", "medicine", "m1", changes={"delta": -10, "stock": 90})
        """
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "event_type": f"{resource_type}.{action}",
            "resource_id": resource_id,
        }

        if changes:
            log_entry["changes"] = changes

        audit_logger.info(json.dumps(log_entry, default=str))

    @staticmethod
    def log_authentication(
        role: str,
        username: str,
        success: bool,
        reason: str = "",
    ):
        """
        Log login attempts at the cosmetic login gate.

        Usage:
            AuditLog.log_authentication("ADMIN", "admin", True)
            AuditLog.log_authentication("PHARMACIST", "ramesh", False, reason="Unknown user")
        """
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "event_type": "auth.login",
            "role": role,
            "username": username,
            "success": success,
        }

        if reason and not success:
            log_entry["reason"] = reason

        if success:
            audit_logger.info(json.dumps(log_entry))
        else:
            audit_logger.warning(json.dumps(log_entry))
