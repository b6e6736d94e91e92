"""Read-only endpoints for the inventory and the audit log."""

from __future__ import annotations

import logging

from checkout_services.inventory.models import AuditLog, Products
from checkout_services.inventory.store import InventoryStore
from checkout_services.service import (
    Request,
    Response,
    ServiceError,
    json_response,
    string_response,
    to_json,
)

log = logging.getLogger(__name__)


def inventory_get(store: InventoryStore, request: Request) -> Response:
    """Return the entire inventory."""
    try:
        items = store.get_inventory_items()
    except ServiceError as exc:
        store.inventory_items = Products()
        log.error("Failed to retrieve all inventory items: %s", exc)
        return string_response(
            500, f"Failed to retrieve all inventory items: {exc}", True
        )
    store.inventory_items = items

    try:
        payload = to_json(items)
    except ServiceError as exc:
        log.error("Failed to process all inventory items: %s", exc)
        return string_response(500, f"Failed to process inventory items: {exc}", True)
    log.info("Successfully retrieved all inventory items")
    return json_response(200, payload, False)


def inventory_item_get(store: InventoryStore, request: Request) -> Response:
    """Return a single inventory item looked up by its SKU."""
    sku = request.vars.get("sku", "")
    if not sku:
        log.error("Valid inventory item not in the form of /inventory/{sku}")
        return string_response(
            400, "Please enter a valid inventory item in the form of /inventory/{sku}", False
        )

    try:
        item, _ = store.get_inventory_item_by_sku(sku)
    except ServiceError as exc:
        log.error("Failed to get inventory item by SKU: %s with error: %s", sku, exc)
        return string_response(500, f"Failed to get inventory item by SKU: {exc}", True)
    if item is None:
        log.info("SKU is empty")
        return string_response(404, "", False)

    try:
        payload = to_json(item)
    except ServiceError as exc:
        log.error("Failed to process inventory item with SKU: %s with error: %s", sku, exc)
        return string_response(
            500, f"Failed to process the requested inventory item {sku}:{exc}", True
        )
    log.info("Successfully got inventory item by SKU: %s", sku)
    return json_response(200, payload, False)


def audit_log_get_all(store: InventoryStore, request: Request) -> Response:
    """Return every audit log entry."""
    try:
        audit_log = store.get_audit_log()
    except ServiceError as exc:
        store.audit_log = AuditLog()
        log.error("Failed to retrieve all audit log entries: %s", exc)
        return string_response(
            500, f"Failed to retrieve all audit log entries: {exc}", True
        )
    store.audit_log = audit_log

    try:
        payload = to_json(audit_log)
    except ServiceError as exc:
        log.error("Failed to process audit log entries: %s", exc)
        return string_response(500, f"Failed to process audit log entries: {exc}", True)
    log.info("Successfully retrieved all audit log entries")
    return json_response(200, payload, False)


def audit_log_get_entry(store: InventoryStore, request: Request) -> Response:
    """Return a single audit log entry looked up by its ID."""
    entry_id = request.vars.get("entry", "")
    if not entry_id:
        log.info("valid entry ID in the form of /auditlog/{entry} not set")
        return string_response(
            400, "Please enter a valid entry ID in the form of /auditlog/{entry}", False
        )

    try:
        entry, _ = store.get_audit_log_entry_by_id(entry_id)
    except ServiceError as exc:
        log.error("Failed to get audit log entry ID: %s with error: %s", entry_id, exc)
        return string_response(500, f"Failed to get audit log entry by ID: {exc}", True)
    if entry is None:
        log.info("Audit log entry is not set")
        return string_response(404, "", False)

    try:
        payload = to_json(entry)
    except ServiceError as exc:
        log.error(
            "Failed to process the requested audit log entry item: %s with error: %s",
            entry_id,
            exc,
        )
        return string_response(
            500,
            f"Failed to process the requested audit log entry item {entry_id}:{exc}",
            True,
        )
    log.info("Successfully retrieved audit log entry with id: %s", entry_id)
    return json_response(200, payload, False)