"""Inventory products, inventory deltas and audit log entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _field(data: dict[str, Any], name: str) -> Any:
    """Look up a key without regard to case; the last matching key wins."""
    folded = name.casefold()
    value = None
    for key, item in data.items():
        if key.casefold() == folded:
            value = item
    return value


def _object(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ValueError(f"{what} must be a JSON object, got {data!r}")
    return data


def _list(value: Any, name: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{name} must be a JSON array, got {value!r}")
    return value


def _str(value: Any, name: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string, got {value!r}")
    return value


def _int(value: Any, name: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    return value


def _float(value: Any, name: str) -> float:
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number, got {value!r}")
    return float(value)


def _bool(value: Any, name: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValueError(f"{name} must be a boolean, got {value!r}")
    return value


def _timestamp(value: Any, name: str) -> int:
    """Decode a timestamp that is stored as a JSON string holding a number."""
    if value is None:
        return 0
    if not isinstance(value, str):
        raise ValueError(f"{name} must be encoded as a string, got {value!r}")
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} is not a valid integer: {value!r}") from None


@dataclass
class Product:
    """A single inventory item."""

    sku: str = ""
    item_price: float = 0.0
    product_name: str = ""
    units_on_hand: int = 0
    max_restocking_level: int = 0
    min_restocking_level: int = 0
    created_at: int = 0
    updated_at: int = 0
    is_active: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> Product:
        data = _object(data, "product")
        return cls(
            sku=_str(_field(data, "sku"), "sku"),
            item_price=_float(_field(data, "itemPrice"), "itemPrice"),
            product_name=_str(_field(data, "productName"), "productName"),
            units_on_hand=_int(_field(data, "unitsOnHand"), "unitsOnHand"),
            max_restocking_level=_int(
                _field(data, "maxRestockingLevel"), "maxRestockingLevel"
            ),
            min_restocking_level=_int(
                _field(data, "minRestockingLevel"), "minRestockingLevel"
            ),
            created_at=_timestamp(_field(data, "createdAt"), "createdAt"),
            updated_at=_timestamp(_field(data, "updatedAt"), "updatedAt"),
            is_active=_bool(_field(data, "isActive"), "isActive"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "sku": self.sku,
            "itemPrice": self.item_price,
            "productName": self.product_name,
            "unitsOnHand": self.units_on_hand,
            "maxRestockingLevel": self.max_restocking_level,
            "minRestockingLevel": self.min_restocking_level,
            "createdAt": str(self.created_at),
            "updatedAt": str(self.updated_at),
            "isActive": self.is_active,
        }


@dataclass
class Products:
    """The whole inventory as served by the inventory endpoint."""

    data: list[Product] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> Products:
        data = _object(data, "inventory")
        return cls(data=[Product.from_dict(p) for p in _list(_field(data, "data"), "data")])

    def to_dict(self) -> dict[str, Any]:
        return {"data": [p.to_dict() for p in self.data]}


@dataclass
class DeltaInventorySKU:
    """A change in the units on hand of one SKU."""

    sku: str = ""
    delta: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> DeltaInventorySKU:
        data = _object(data, "inventory delta")
        return cls(
            sku=_str(_field(data, "SKU"), "SKU"),
            delta=_int(_field(data, "delta"), "delta"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"SKU": self.sku, "delta": self.delta}


@dataclass
class AuditLogEntry:
    """One recorded transaction against the inventory."""

    card_id: str = ""
    account_id: int = 0
    role_id: int = 0
    person_id: int = 0
    inventory_delta: list[DeltaInventorySKU] = field(default_factory=list)
    created_at: int = 0
    audit_entry_id: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> AuditLogEntry:
        data = _object(data, "audit log entry")
        deltas = _list(_field(data, "inventoryDelta"), "inventoryDelta")
        return cls(
            card_id=_str(_field(data, "cardId"), "cardId"),
            account_id=_int(_field(data, "accountId"), "accountId"),
            role_id=_int(_field(data, "roleId"), "roleId"),
            person_id=_int(_field(data, "personId"), "personId"),
            inventory_delta=[DeltaInventorySKU.from_dict(d) for d in deltas],
            created_at=_timestamp(_field(data, "createdAt"), "createdAt"),
            audit_entry_id=_str(_field(data, "auditEntryId"), "auditEntryId"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "cardId": self.card_id,
            "accountId": self.account_id,
            "roleId": self.role_id,
            "personId": self.person_id,
            "inventoryDelta": [d.to_dict() for d in self.inventory_delta],
            "createdAt": str(self.created_at),
            "auditEntryId": self.audit_entry_id,
        }


@dataclass
class AuditLog:
    """All audit log entries as served by the audit log endpoint."""

    data: list[AuditLogEntry] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> AuditLog:
        data = _object(data, "audit log")
        entries = _list(_field(data, "data"), "data")
        return cls(data=[AuditLogEntry.from_dict(e) for e in entries])

    def to_dict(self) -> dict[str, Any]:
        return {"data": [e.to_dict() for e in self.data]}