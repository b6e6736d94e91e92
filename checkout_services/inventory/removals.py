"""Endpoints that delete inventory items and audit log entries."""

from __future__ import annotations

import logging

from checkout_services.inventory.models import AuditLog, Products
from checkout_services.inventory.store import DELETE_ALL_QUERY_STRING, InventoryStore
from checkout_services.service import (
    Request,
    Response,
    ServiceError,
    json_response,
    string_response,
    to_json,
)

log = logging.getLogger(__name__)


def inventory_delete(store: InventoryStore, request: Request) -> Response:
    """Delete one inventory item by SKU, or the whole inventory for "all"."""
    sku = request.vars.get("sku", "")
    if not sku:
        log.error("Empty inventory item SKU")
        return string_response(
            400, "Please enter a valid inventory item in the form of /inventory/{sku}", True
        )

    if sku == DELETE_ALL_QUERY_STRING:
        try:
            store.delete_inventory()
        except ServiceError as exc:
            log.error("Failed to properly reset inventory: %s", exc)
            return string_response(
                500, f"Failed to properly reset inventory: {exc}", True
            )
        return json_response(200, to_json(Products()), False)

    try:
        item, items = store.get_inventory_item_by_sku(sku)
    except ServiceError as exc:
        store.inventory_items = Products()
        log.error("Failed to get requested inventory item by SKU: %s", exc)
        return string_response(
            500, f"Failed to get requested inventory item by SKU: {exc}", True
        )
    store.inventory_items = items

    if item is None:
        log.info("Item does not exist")
        return string_response(404, "Item does not exist", False)

    store.delete_inventory_item(item)
    try:
        store.write_inventory()
    except ServiceError as exc:
        log.error("Failed to write updated inventory: %s", exc)
        return string_response(500, "Failed to write updated inventory", True)

    try:
        payload = to_json(item)
    except ServiceError as exc:
        message = (
            "Successfully deleted the item from inventory, but failed to serialize it "
            f"so that it could be sent back to the requester: {exc}"
        )
        log.error(message)
        return string_response(500, message, True)
    log.info("Successfully deleted the item: %s from inventory", item.sku)
    return json_response(200, payload, False)


def audit_log_delete(store: InventoryStore, request: Request) -> Response:
    """Delete one audit log entry by ID, or the whole audit log for "all"."""
    entry_id = request.vars.get("entry", "")
    if not entry_id:
        log.error("EntryID is empty")
        return string_response(
            400,
            "Please enter a valid audit log entry ID in the form of /auditlog/{entryId}",
            True,
        )

    if entry_id == DELETE_ALL_QUERY_STRING:
        try:
            store.delete_audit_log()
        except ServiceError as exc:
            log.error("Failed to reset audit log: %s", exc)
            return string_response(
                500, f"Failed to properly reset audit log: {exc}", True
            )
        log.info("Successfully deleted audit log")
        return json_response(200, to_json(AuditLog()), False)

    try:
        entry, audit_log = store.get_audit_log_entry_by_id(entry_id)
    except ServiceError as exc:
        store.audit_log = AuditLog()
        log.error("Failed to get audit log entry ID: %s with error: %s", entry_id, exc)
        return string_response(
            500, f"Failed to get requested audit log entry by ID: {exc}", True
        )
    store.audit_log = audit_log

    if entry is None:
        log.error("Item with entry ID: %s does not exist", entry_id)
        return string_response(404, "Item does not exist", False)

    store.delete_audit_log_entry(entry)
    try:
        store.write_audit_log()
    except ServiceError:
        log.error("Failed to write updated audit log")
        return string_response(500, "Failed to write updated audit log", True)

    try:
        payload = to_json(entry)
    except ServiceError as exc:
        message = (
            "Successfully deleted item from audit log, but failed to serialize "
            f"information back to the requester: {exc}"
        )
        log.error(message)
        return string_response(500, message, True)
    log.info("Successfully deleted item: %s from audit log", entry.audit_entry_id)
    return json_response(200, payload, False)