"""Endpoints that add to and change the inventory and the audit log."""

from __future__ import annotations

import dataclasses
import json
import logging
import time
from typing import Any

from checkout_services.inventory.models import (
    AuditLog,
    AuditLogEntry,
    DeltaInventorySKU,
    Product,
    Products,
)
from checkout_services.inventory.store import InventoryStore
from checkout_services.service import (
    HTTPResponse,
    Request,
    Response,
    ServiceError,
    gen_uuid,
    load_json_file,
    string_response,
    to_json,
    write_json_file,
)

DEFAULT_MAX_RESTOCKING_LEVEL = 5

log = logging.getLogger(__name__)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _load_inventory(store: InventoryStore) -> Products:
    data = load_json_file(store.inventory_file_name)
    return Products() if data is None else Products.from_dict(data)


def _load_audit_log(store: InventoryStore) -> AuditLog:
    data = load_json_file(store.audit_log_file_name)
    return AuditLog() if data is None else AuditLog.from_dict(data)


def _parse_deltas(body: bytes) -> list[DeltaInventorySKU]:
    payload = json.loads(body)
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise ValueError("expected a JSON array of inventory deltas")
    return [
        DeltaInventorySKU() if item is None else DeltaInventorySKU.from_dict(item)
        for item in payload
    ]


def _parse_posted_items(body: bytes) -> list[dict[str, Any]]:
    payload = json.loads(body)
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise ValueError("expected a JSON array of inventory items")
    if not all(item is None or isinstance(item, dict) for item in payload):
        raise ValueError("every inventory item must be a JSON object")
    return [item or {} for item in payload]


def delta_inventory_sku_post(store: InventoryStore, request: Request) -> Response:
    """Apply changes in units on hand to the inventory."""
    try:
        deltas = _parse_deltas(request.body)
    except ValueError as exc:
        log.error("Failed to process the posted delta inventory item(s): %s", exc)
        return string_response(
            400, f"Failed to process the posted delta inventory item(s): {exc}", True
        )

    try:
        inventory = _load_inventory(store)
    except (ServiceError, ValueError) as exc:
        log.error("Failed to retrieve all inventory items: %s", exc)
        return string_response(
            500, f"Failed to retrieve all inventory items: {exc}", True
        )

    updated: list[Product] = []
    for delta in deltas:
        item = next((p for p in inventory.data if p.sku == delta.sku), None)
        if item is None:
            continue
        item.units_on_hand += delta.delta
        updated.append(dataclasses.replace(item))

    if not updated:
        log.info("No change made to inventory")
        return string_response(304, "", False)

    try:
        write_json_file(store.inventory_file_name, inventory)
    except ServiceError as exc:
        log.error("Failed to write inventory: %s", exc)
        return string_response(500, f"Failed to write inventory: {exc}", True)

    envelope = HTTPResponse()
    try:
        payload = to_json(updated)
    except ServiceError:
        log.info("Updated inventory successfully")
        envelope.set_string(200, "Updated inventory successfully", False)
    else:
        log.info("Updated inventory successfully: %s", payload)
        envelope.set_json(200, payload, False)
    return envelope.to_response()


def _apply_update(product: Product, posted: dict[str, Any]) -> None:
    sku = posted.get("sku")
    price = posted.get("itemPrice")
    if _is_number(price):
        product.item_price = float(price)
    max_level = posted.get("maxRestockingLevel")
    if _is_number(max_level):
        product.max_restocking_level = int(max_level)
    min_level = posted.get("minRestockingLevel")
    if _is_number(min_level):
        product.min_restocking_level = int(min_level)
    is_active = posted.get("isActive")
    if isinstance(is_active, bool):
        product.is_active = is_active
    units = posted.get("unitsOnHand")
    if units is not None:
        if _is_number(units):
            product.units_on_hand += int(units)
        if product.units_on_hand < 0:
            log.info(
                "Product %s on hand is less than 0 which was caused by a bad delta value",
                sku,
            )
        if product.units_on_hand <= product.min_restocking_level:
            log.info("Product %s needs to be restocked", sku)
        if product.units_on_hand > product.max_restocking_level:
            log.info("Product %s is overstocked", sku)
    product.updated_at = time.time_ns()


def _new_product(sku: str, posted: dict[str, Any]) -> Product:
    def number(key: str, default: float) -> float:
        value = posted.get(key)
        return value if _is_number(value) else default

    now = time.time_ns()
    return Product(
        sku=sku,
        item_price=float(number("itemPrice", 0)),
        units_on_hand=int(number("unitsOnHand", 0)),
        max_restocking_level=int(
            number("maxRestockingLevel", DEFAULT_MAX_RESTOCKING_LEVEL)
        ),
        min_restocking_level=int(number("minRestockingLevel", 0)),
        created_at=now,
        updated_at=now,
        is_active=True,
    )


def inventory_post(store: InventoryStore, request: Request) -> Response:
    """Add new inventory items and update fields of existing ones."""
    try:
        posted_items = _parse_posted_items(request.body)
    except ValueError as exc:
        log.error("Failed to process the posted inventory item(s): %s", exc)
        return string_response(
            400, f"Failed to process the posted inventory item(s): {exc}", True
        )

    try:
        inventory = _load_inventory(store)
    except (ServiceError, ValueError) as exc:
        log.error("Failed to retrieve all inventory items: %s", exc)
        return string_response(
            500, f"Failed to retrieve all inventory items: {exc}", True
        )

    envelope = HTTPResponse()
    changed_items: list[Product] = []
    for posted in posted_items:
        sku = posted.get("sku")
        matches = [p for p in inventory.data if p.sku == sku]
        for product in matches:
            _apply_update(product, posted)
            changed_items.append(dataclasses.replace(product))
            envelope.set_string(200, "Updated inventory", False)
        if matches:
            continue
        if not isinstance(sku, str):
            log.error("Failed to process the posted inventory item(s): sku must be a string")
            return string_response(
                400,
                "Failed to process the posted inventory item(s): sku must be a string",
                True,
            )
        product = _new_product(sku, posted)
        inventory.data.append(product)
        changed_items.append(dataclasses.replace(product))
        envelope.set_string(200, "Updated inventory", False)

    if changed_items:
        try:
            write_json_file(store.inventory_file_name, inventory)
        except ServiceError as exc:
            log.error("Failed to write inventory: %s", exc)
            return string_response(500, f"Failed to write inventory: {exc}", True)
        try:
            payload = to_json(changed_items)
        except ServiceError:
            log.info("Updated inventory successfully")
            envelope.set_string(200, "Updated inventory successfully", False)
        else:
            log.info("Updated inventory successfully: %s", payload)
            envelope.set_json(200, payload, False)
    return envelope.to_response()


def audit_log_post(store: InventoryStore, request: Request) -> Response:
    """Add a new entry, with a freshly assigned ID, to the audit log."""
    try:
        payload = json.loads(request.body)
        entry = AuditLogEntry() if payload is None else AuditLogEntry.from_dict(payload)
    except ValueError as exc:
        log.error("Failed to process the posted audit log entry: %s", exc)
        return string_response(
            400, f"Failed to process the posted audit log entry: {exc}", True
        )

    if entry.audit_entry_id:
        log.error("The posted audit log entry already has an entry ID")
        return string_response(
            400,
            "The submitted audit log entry must not have an auditEntryId defined.",
            True,
        )

    entry.audit_entry_id = gen_uuid()
    if entry.created_at == 0:
        entry.created_at = time.time_ns()

    try:
        audit_log = _load_audit_log(store)
    except (ServiceError, ValueError) as exc:
        log.error("Failed to retrieve all audit log entries: %s", exc)
        return string_response(
            500, f"Failed to retrieve all audit log entries: {exc}", True
        )

    if any(e.audit_entry_id == entry.audit_entry_id for e in audit_log.data):
        log.error("Failed to process the requested audit log entry: %s", entry.audit_entry_id)
        return string_response(
            500,
            f"Failed to process the requested audit log entry {entry.audit_entry_id} "
            "as it already exists",
            True,
        )

    audit_log.data.append(entry)
    try:
        write_json_file(store.audit_log_file_name, audit_log)
    except ServiceError as exc:
        log.error(
            "Failed to write the audit log entry: %s : %s", entry.audit_entry_id, exc
        )
        return string_response(
            500,
            f"Failed to write the audit log entry {entry.audit_entry_id}: {exc}",
            True,
        )

    try:
        result = to_json(entry)
    except ServiceError as exc:
        log.error(
            "Failed to return the requested audit log entry to the user: %s : %s",
            entry.audit_entry_id,
            exc,
        )
        return string_response(
            500,
            "Failed to return the requested audit log entry to the user "
            f"{entry.audit_entry_id}: {exc}",
            True,
        )

    log.info("Successfully added new entry to audit log: %s", entry.audit_entry_id)
    envelope = HTTPResponse()
    envelope.set_json(200, result, False)
    return envelope.to_response()