"""Routes of the inventory service and the command that starts it."""

from __future__ import annotations

import argparse
import functools
import logging
import os
import sys
from typing import Callable

from checkout_services.inventory.queries import (
    audit_log_get_all,
    audit_log_get_entry,
    inventory_get,
    inventory_item_get,
)
from checkout_services.inventory.removals import audit_log_delete, inventory_delete
from checkout_services.inventory.store import InventoryStore
from checkout_services.inventory.updates import (
    audit_log_post,
    delta_inventory_sku_post,
    inventory_post,
)
from checkout_services.service import AppService, Request, Response, ServiceError

SERVICE_KEY = "ms-inventory"
INVENTORY_FILE_SETTING = "InventoryFileName"
AUDIT_LOG_FILE_SETTING = "AuditLogFileName"

log = logging.getLogger(__name__)

_Endpoint = Callable[[InventoryStore, Request], Response]

_ROUTES: tuple[tuple[str, _Endpoint, str], ...] = (
    ("/inventory", inventory_get, "GET"),
    ("/inventory", inventory_post, "POST"),
    ("/inventory/delta", delta_inventory_sku_post, "POST"),
    ("/inventory/{sku}", inventory_item_get, "GET"),
    ("/inventory/{sku}", inventory_delete, "DELETE"),
    ("/auditlog", audit_log_get_all, "GET"),
    ("/auditlog", audit_log_post, "POST"),
    ("/auditlog/{entry}", audit_log_get_entry, "GET"),
    ("/auditlog/{entry}", audit_log_delete, "DELETE"),
)


class Controller:
    """Binds the inventory and audit log endpoints to an application service."""

    def __init__(
        self,
        service: AppService,
        audit_log_file_name: str | os.PathLike,
        inventory_file_name: str | os.PathLike,
    ) -> None:
        self.service = service
        self.store = InventoryStore(inventory_file_name, audit_log_file_name)

    def add_all_routes(self) -> None:
        """Register every endpoint of this controller with the service."""
        for path, endpoint, method in _ROUTES:
            handler = functools.partial(endpoint, self.store)
            try:
                self.service.add_route(path, handler, method)
            except ServiceError as exc:
                log.error("error adding route: %s", exc)
                raise ServiceError(f"error adding route: {exc}") from exc


def main(argv: list[str] | None = None) -> int:
    """Start the inventory service."""
    parser = argparse.ArgumentParser(prog=SERVICE_KEY, description=__doc__)
    parser.add_argument("--inventory-file", default="inventory.json")
    parser.add_argument("--audit-log-file", default="auditlog.json")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=48095)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    service = AppService(
        SERVICE_KEY,
        {
            INVENTORY_FILE_SETTING: args.inventory_file,
            AUDIT_LOG_FILE_SETTING: args.audit_log_file,
        },
    )

    try:
        inventory_file_name = service.get_app_setting(INVENTORY_FILE_SETTING)
    except ServiceError as exc:
        log.error("failed load InventoryFileName from ApplicationSettings: %s", exc)
        return 1
    if not inventory_file_name:
        log.error("InventoryFileName configuration setting is empty")
        return 1

    try:
        audit_log_file_name = service.get_app_setting(AUDIT_LOG_FILE_SETTING)
    except ServiceError as exc:
        log.error("failed load AuditLogFileName from ApplicationSettings: %s", exc)
        return 1
    if not audit_log_file_name:
        log.error("AuditLogFileName configuration setting is empty")
        return 1

    controller = Controller(service, audit_log_file_name, inventory_file_name)
    try:
        controller.add_all_routes()
    except ServiceError as exc:
        log.error("failed to add all Routes: %s", exc)
        return 1
    try:
        service.make_it_run(args.host, args.port)
    except ServiceError as exc:
        log.error("MakeItRun returned error: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())