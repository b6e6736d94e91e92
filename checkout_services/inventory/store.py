"""File-backed storage of the inventory and the audit log."""

from __future__ import annotations

import logging
import os
from typing import Any

from checkout_services.inventory.models import AuditLog, AuditLogEntry, Product, Products
from checkout_services.service import ServiceError, load_json_file, write_json_file

DELETE_ALL_QUERY_STRING = "all"

log = logging.getLogger(__name__)


class InventoryStore:
    """Reads and writes the inventory and audit log JSON files."""

    def __init__(
        self,
        inventory_file_name: str | os.PathLike,
        audit_log_file_name: str | os.PathLike,
    ) -> None:
        self.inventory_file_name = os.fspath(inventory_file_name)
        self.audit_log_file_name = os.fspath(audit_log_file_name)
        self.inventory_items = Products()
        self.audit_log = AuditLog()

    def get_inventory_items(self) -> Products:
        """Read the inventory from its JSON file."""
        try:
            data = load_json_file(self.inventory_file_name)
            return Products() if data is None else Products.from_dict(data)
        except (ServiceError, ValueError) as exc:
            log.error("Failed to load inventory JSON file: %s", exc)
            raise ServiceError(f"Failed to load inventory JSON file: {exc}") from exc

    def get_inventory_item_by_sku(self, sku: str) -> tuple[Product | None, Products]:
        """Return the item with this SKU, or None, together with the inventory."""
        try:
            items = self.get_inventory_items()
        except ServiceError as exc:
            log.error("Failed to get inventory items: %s", exc)
            raise ServiceError(f"Failed to get inventory items: {exc}") from exc
        item = next((p for p in items.data if p.sku == sku), None)
        return item, items

    def get_audit_log(self) -> AuditLog:
        """Read the audit log from its JSON file."""
        try:
            data = load_json_file(self.audit_log_file_name)
            return AuditLog() if data is None else AuditLog.from_dict(data)
        except (ServiceError, ValueError) as exc:
            log.error("Failed to load audit log JSON file: %s", exc)
            raise ServiceError(f"Failed to load audit log JSON file: {exc}") from exc

    def get_audit_log_entry_by_id(
        self, audit_entry_id: str
    ) -> tuple[AuditLogEntry | None, AuditLog]:
        """Return the entry with this ID, or None, together with the audit log."""
        try:
            entries = self.get_audit_log()
        except ServiceError as exc:
            log.error("Failed to get audit log items: %s", exc)
            raise ServiceError(f"Failed to get audit log items: {exc}") from exc
        entry = next((e for e in entries.data if e.audit_entry_id == audit_entry_id), None)
        return entry, entries

    def delete_inventory(self) -> None:
        """Reset the inventory file to an empty list."""
        log.debug("Inventory JSON content reset")
        self.write_json(self.inventory_file_name, Products())

    def delete_audit_log(self) -> None:
        """Reset the audit log file to an empty list."""
        log.debug("Audit Log JSON content reset")
        self.write_json(self.audit_log_file_name, AuditLog())

    def write_json(self, file_name: str | os.PathLike, content: Any) -> None:
        """Write content as JSON to a file."""
        log.debug("Wrote: %s to Inventory JSON: %s", content, os.fspath(file_name))
        write_json_file(file_name, content)

    def write_inventory(self) -> None:
        """Write the held inventory to its file."""
        self.write_json(self.inventory_file_name, self.inventory_items)

    def write_audit_log(self) -> None:
        """Write the held audit log to its file."""
        self.write_json(self.audit_log_file_name, self.audit_log)

    def delete_inventory_item(self, item: Product) -> None:
        """Remove the first held inventory item with the same SKU."""
        for index, existing in enumerate(self.inventory_items.data):
            if existing.sku == item.sku:
                del self.inventory_items.data[index]
                log.debug("Deleted: %s from inventory", item.sku)
                return

    def delete_audit_log_entry(self, entry: AuditLogEntry) -> None:
        """Remove the first held audit log entry with the same entry ID."""
        for index, existing in enumerate(self.audit_log.data):
            if existing.audit_entry_id == entry.audit_entry_id:
                del self.audit_log.data[index]
                log.debug("Deleted: %s from audit log", entry.audit_entry_id)
                return