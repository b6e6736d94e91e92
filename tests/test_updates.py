import json

import pytest

from checkout_services.inventory.models import (
    AuditLog,
    AuditLogEntry,
    DeltaInventorySKU,
    Product,
    Products,
)
from checkout_services.inventory.store import InventoryStore
from checkout_services.inventory.updates import (
    audit_log_post,
    delta_inventory_sku_post,
    inventory_post,
)
from checkout_services.service import Request

INVALID_JSON = "invalid json test"


def default_products(units=0):
    def product(name, sku, max_level):
        return Product(
            sku=sku,
            item_price=1.99,
            product_name=name,
            units_on_hand=units,
            max_restocking_level=max_level,
            min_restocking_level=0,
            created_at=1567787309,
            updated_at=1567787309,
            is_active=True,
        )

    return Products(
        data=[
            product("Sprite (Lemon-Lime) - 16.9 oz", "4900002470", 24),
            product("Mountain Dew (Low Calorie) - 16.9 oz", "1200010735", 18),
            product("Mountain Dew - 16.9 oz", "1200050408", 6),
        ]
    )


def default_audits():
    def entry(card_id, ident, delta):
        return AuditLogEntry(
            card_id=card_id,
            account_id=ident,
            role_id=ident,
            person_id=ident,
            inventory_delta=[
                DeltaInventorySKU(sku="4900002470", delta=delta),
                DeltaInventorySKU(sku="1200010735", delta=delta),
            ],
            created_at=1567787309,
            audit_entry_id=str(ident),
        )

    return AuditLog(
        data=[
            entry("0000000001", 1, 5),
            entry("0000000002", 2, -1),
            entry("0000000003", 3, -2),
        ]
    )


def make_store(tmp_path, products):
    store = InventoryStore(
        tmp_path / "test-inventory.json", tmp_path / "test-auditlog.json"
    )
    store.inventory_items = products
    store.audit_log = default_audits()
    store.write_inventory()
    store.write_audit_log()
    return store


@pytest.fixture
def store(tmp_path):
    return make_store(tmp_path, default_products())


@pytest.fixture
def stocked_store(tmp_path):
    return make_store(tmp_path, default_products(units=5))


def post(path, body):
    return Request(method="POST", path=path, body=body.encode("utf-8"))


def envelope(response):
    return json.loads(response.body)


def find(products, sku):
    return next(p for p in products.data if p.sku == sku)


# ---------------------------------------------------------------- inventory


@pytest.mark.parametrize(
    "bad_inventory, body, status, products_match",
    [
        (False, '[{"sku": "4900002470","itemPrice": 10.5,"unitsOnHand": 2,"maxRestockingLevel": 9,"minRestockingLevel": 1,"isActive": false}]', 200, False),
        (False, '[{"sku": "9999999999","itemPrice": 10.5,"unitsOnHand": 2,"maxRestockingLevel": 9,"minRestockingLevel": 1,"isActive": false}]', 200, False),
        (False, '[{"sku": "8888888888","isActive": false}]', 200, False),
        (False, '[{"sku": "7777777777","itemPrice": "zero","unitsOnHand": "zero","maxRestockingLevel": "zero","minRestockingLevel": "zero","isActive": false}]', 200, False),
        (False, '[{"sku": "4900002470","itemPrice": 10.5,"unitsOnHand": -10,"maxRestockingLevel": 9,"minRestockingLevel": 1,"isActive": false}]', 200, False),
        (False, '[{"sku": "4900002470","itemPrice": 10.5,"unitsOnHand": 20,"maxRestockingLevel": 9,"minRestockingLevel": 1,"isActive": false}]', 200, False),
        (False, "invalid item", 400, True),
        (True, '[{"sku": "4900002470","itemPrice": 10.5,"unitsOnHand": 2,"maxRestockingLevel": 9,"minRestockingLevel": 1,"isActive": false}]', 500, True),
    ],
)
def test_inventory_post_cases(store, bad_inventory, body, status, products_match):
    if bad_inventory:
        with open(store.inventory_file_name, "w") as fh:
            fh.write(INVALID_JSON)

    response = inventory_post(store, post("/inventory", body))

    assert response.status_code == status
    if not bad_inventory:
        from_file = store.get_inventory_items()
        if products_match:
            assert from_file == default_products()
        else:
            assert from_file != default_products()


def test_inventory_post_updates_existing_item(store):
    body = '[{"sku": "4900002470","itemPrice": 10.5,"unitsOnHand": 2,"maxRestockingLevel": 9,"minRestockingLevel": 1,"isActive": false}]'
    response = inventory_post(store, post("/inventory", body))

    item = find(store.get_inventory_items(), "4900002470")
    assert item.item_price == 10.5
    assert item.units_on_hand == 2
    assert item.max_restocking_level == 9
    assert item.min_restocking_level == 1
    assert item.is_active is False
    assert item.product_name == "Sprite (Lemon-Lime) - 16.9 oz"
    assert item.created_at == 1567787309
    assert item.updated_at > 1567787309

    payload = envelope(response)
    assert payload["error"] is False
    content = json.loads(payload["content"])
    assert [c["sku"] for c in content] == ["4900002470"]
    assert content[0]["unitsOnHand"] == 2


def test_inventory_post_units_are_added(store):
    body = '[{"sku": "4900002470","unitsOnHand": -10}]'
    inventory_post(store, post("/inventory", body))
    inventory_post(store, post("/inventory", '[{"sku": "4900002470","unitsOnHand": 3}]'))

    assert find(store.get_inventory_items(), "4900002470").units_on_hand == -7


def test_inventory_post_new_item_defaults(store):
    response = inventory_post(
        store, post("/inventory", '[{"sku": "8888888888","isActive": false}]')
    )

    assert response.status_code == 200
    inventory = store.get_inventory_items()
    assert len(inventory.data) == 4
    item = inventory.data[-1]
    assert item.sku == "8888888888"
    assert item.item_price == 0.0
    assert item.units_on_hand == 0
    assert item.max_restocking_level == 5
    assert item.min_restocking_level == 0
    assert item.is_active is True
    assert item.product_name == ""
    assert item.created_at > 0


def test_inventory_post_new_item_with_string_values_uses_defaults(store):
    body = '[{"sku": "7777777777","itemPrice": "zero","unitsOnHand": "zero","maxRestockingLevel": "zero","minRestockingLevel": "zero","isActive": false}]'
    inventory_post(store, post("/inventory", body))

    item = find(store.get_inventory_items(), "7777777777")
    assert (item.item_price, item.units_on_hand) == (0.0, 0)
    assert (item.max_restocking_level, item.min_restocking_level) == (5, 0)


def test_inventory_post_new_item_with_values(store):
    body = '[{"sku": "9999999999","itemPrice": 10.5,"unitsOnHand": 2,"maxRestockingLevel": 9,"minRestockingLevel": 1}]'
    inventory_post(store, post("/inventory", body))

    item = find(store.get_inventory_items(), "9999999999")
    assert item.item_price == 10.5
    assert item.units_on_hand == 2
    assert item.max_restocking_level == 9
    assert item.min_restocking_level == 1


def test_inventory_post_missing_sku_is_rejected(store):
    response = inventory_post(store, post("/inventory", '[{"itemPrice": 1}]'))

    assert response.status_code == 400
    assert envelope(response)["error"] is True
    assert store.get_inventory_items() == default_products()


def test_inventory_post_empty_list_changes_nothing(store):
    response = inventory_post(store, post("/inventory", "[]"))

    assert response.status_code == 200
    assert store.get_inventory_items() == default_products()


# ---------------------------------------------------------------- audit log

NEW_ENTRY = '{"CardID":"0000000001","AccountID":1,"RoleID":1,"PersonID":1,"InventoryDelta":[{"SKU":"4900002470","Delta": 5},{"SKU":"1200010735","Delta": 5}]}'


@pytest.mark.parametrize(
    "bad_audit_log, body, status, audits_match",
    [
        (False, NEW_ENTRY, 200, False),
        (False, '{"CardID":"0000000001","AccountID":1,"RoleID":1,"PersonID":1,"AuditEntryID":"1","InventoryDelta":[{"SKU":"4900002470","Delta": 5},{"SKU":"1200010735","Delta": 5}]}', 400, True),
        (False, "This is an invalid string", 400, True),
        (True, NEW_ENTRY, 500, False),
    ],
)
def test_audit_log_post_cases(store, bad_audit_log, body, status, audits_match):
    if bad_audit_log:
        with open(store.audit_log_file_name, "w") as fh:
            fh.write(INVALID_JSON)

    response = audit_log_post(store, post("/auditlog", body))

    assert response.status_code == status
    if not bad_audit_log:
        from_file = store.get_audit_log()
        if audits_match:
            assert from_file == default_audits()
        else:
            assert from_file != default_audits()


def test_audit_log_post_appends_entry_with_new_id(store):
    response = audit_log_post(store, post("/auditlog", NEW_ENTRY))

    audit_log = store.get_audit_log()
    assert len(audit_log.data) == 4
    added = audit_log.data[-1]
    assert added.card_id == "0000000001"
    assert added.account_id == 1
    assert added.inventory_delta == [
        DeltaInventorySKU(sku="4900002470", delta=5),
        DeltaInventorySKU(sku="1200010735", delta=5),
    ]
    assert added.audit_entry_id not in {"", "1", "2", "3"}
    assert added.created_at > 0

    content = json.loads(envelope(response)["content"])
    assert content["auditEntryId"] == added.audit_entry_id


def test_audit_log_post_keeps_given_created_at(store):
    body = '{"cardId":"0000000001","createdAt":"42"}'
    response = audit_log_post(store, post("/auditlog", body))

    assert response.status_code == 200
    assert store.get_audit_log().data[-1].created_at == 42


def test_audit_log_post_rejects_numeric_created_at(store):
    response = audit_log_post(store, post("/auditlog", '{"createdAt": 42}'))

    assert response.status_code == 400
    assert store.get_audit_log() == default_audits()


# ---------------------------------------------------------------- deltas


@pytest.mark.parametrize(
    "bad_inventory, body, status, products_match",
    [
        (False, '[{"SKU": "4900002470","Delta": -1}]', 200, False),
        (False, '[{"SKU": "0000000000","Delta": 0}]', 304, True),
        (False, "This is an invalid string", 400, True),
        (True, '[{"SKU": "4900002470","Delta": -1}]', 500, False),
    ],
)
def test_delta_inventory_sku_post_cases(
    stocked_store, bad_inventory, body, status, products_match
):
    if bad_inventory:
        with open(stocked_store.inventory_file_name, "w") as fh:
            fh.write(INVALID_JSON)

    response = delta_inventory_sku_post(stocked_store, post("/inventory/delta", body))

    assert response.status_code == status
    if not bad_inventory:
        from_file = stocked_store.get_inventory_items()
        if products_match:
            assert from_file == default_products(units=5)
        else:
            assert from_file != default_products(units=5)


def test_delta_inventory_sku_post_applies_deltas(stocked_store):
    body = '[{"SKU": "4900002470","Delta": -1},{"SKU": "1200050408","Delta": 3},{"SKU": "0000000000","Delta": 7}]'
    response = delta_inventory_sku_post(stocked_store, post("/inventory/delta", body))

    inventory = stocked_store.get_inventory_items()
    assert find(inventory, "4900002470").units_on_hand == 4
    assert find(inventory, "1200010735").units_on_hand == 5
    assert find(inventory, "1200050408").units_on_hand == 8

    content = json.loads(envelope(response)["content"])
    assert [(c["sku"], c["unitsOnHand"]) for c in content] == [
        ("4900002470", 4),
        ("1200050408", 8),
    ]


def test_delta_zero_on_existing_sku_counts_as_update(stocked_store):
    response = delta_inventory_sku_post(
        stocked_store, post("/inventory/delta", '[{"SKU": "4900002470","Delta": 0}]')
    )

    assert response.status_code == 200
    assert find(stocked_store.get_inventory_items(), "4900002470").units_on_hand == 5


def test_delta_inventory_sku_post_empty_body_is_bad_request(stocked_store):
    response = delta_inventory_sku_post(stocked_store, post("/inventory/delta", ""))

    assert response.status_code == 400
    assert envelope(response)["error"] is True