# checkout-services

Two small HTTP microservices for an automated checkout system:

- **Authentication** resolves a 10-character card ID to the role, person and
  account it belongs to, using `cards.json`, `people.json` and `accounts.json`.
- **Inventory** keeps a product inventory and an audit log of stock changes in
  JSON files and exposes them over a REST interface.

The package uses only the Python standard library.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Running the services

```
checkout-authentication [--data-dir DIR] [--host HOST] [--port PORT]
checkout-inventory [--inventory-file FILE] [--audit-log-file FILE] [--host HOST] [--port PORT]
```

- `checkout-authentication` reads `cards.json`, `people.json` and
  `accounts.json` from `--data-dir` (default: the current directory) and
  listens on port 48096 by default.
- `checkout-inventory` keeps its data in `--inventory-file` (default
  `inventory.json`) and `--audit-log-file` (default `auditlog.json`) and
  listens on port 48095 by default. It exits with status 1 if either file
  name is empty.

Both listen on `0.0.0.0` unless `--host` is given, and serve until
interrupted.

## Response format

Every endpoint answers with a JSON envelope:

```json
{"content": "...", "contentType": "json", "statusCode": 200, "error": false}
```

`contentType` is `"json"` when `content` holds a serialized JSON document and
`"string"` when it holds a plain message. A path with no route answers `404`;
a known path with the wrong method answers `405`.

## Authentication endpoint

| Method | Path                        | Result                                                       |
|--------|-----------------------------|--------------------------------------------------------------|
| GET    | `/authentication/{cardid}`  | `AuthData` with `accountID`, `personID`, `roleID`, `cardID`  |

Responses:

- `400` when the card ID is not exactly 10 characters,
- `401` when the card is unknown or invalid, or its person or account is
  unknown or inactive,
- `500` when one of the data files cannot be read,
- `200` with the authentication data otherwise.

In the data files, `createdAt` and `updatedAt` are stored as strings holding
an integer.

## Inventory endpoints

| Method | Path                  | Purpose                                              |
|--------|-----------------------|------------------------------------------------------|
| GET    | `/inventory`          | the whole inventory                                  |
| POST   | `/inventory`          | add products or update fields of existing ones       |
| POST   | `/inventory/delta`    | apply `{"SKU": ..., "delta": ...}` changes to stock  |
| GET    | `/inventory/{sku}`    | one product                                          |
| DELETE | `/inventory/{sku}`    | remove one product, or everything with `all`         |
| GET    | `/auditlog`           | the whole audit log                                  |
| POST   | `/auditlog`           | append an entry; the service assigns its ID          |
| GET    | `/auditlog/{entry}`   | one audit log entry                                  |
| DELETE | `/auditlog/{entry}`   | remove one entry, or everything with `all`           |

Details:

- A delta post that matches no known SKU answers `304 Not Modified`.
- On `POST /inventory`, an existing product takes any numeric `itemPrice`,
  `maxRestockingLevel` and `minRestockingLevel`, a boolean `isActive`, and has
  a numeric `unitsOnHand` added to its stock. A new product needs a string
  `sku`; missing or non-numeric values default to a price of 0, 0 units on
  hand, a maximum restocking level of 5 and a minimum of 0, and it starts
  active.
- `POST /auditlog` rejects an entry that already carries an `auditEntryId`
  with `400`; `createdAt` is set to the current time in nanoseconds when it
  is 0 or missing.

## Using the pieces from Python

The data models and the store work without a server:

```python
from checkout_services.inventory.store import InventoryStore

store = InventoryStore("inventory.json", "auditlog.json")
store.delete_inventory()
items = store.get_inventory_items()
item, items = store.get_inventory_item_by_sku("SKU-0001")
```

```python
from checkout_services.authentication.models import load_cards

cards = load_cards("cards.json")
card = cards.get_card_by_card_id("ABCDEFGHIJ")  # None if not found
```

Routes can be exercised in-process through `AppService.dispatch`:

```python
from checkout_services.service import AppService
from checkout_services.authentication.controller import Controller

service = AppService("ms-authentication")
Controller(service, "data").add_all_routes()
response = service.dispatch("GET", "/authentication/ABCDEFGHIJ", b"")
print(response.status_code, response.body)
```

Failures in file access, JSON parsing or route registration raise
`checkout_services.service.ServiceError`.

## What the package does not do

- Settings come only from the command-line options; there is no
  configuration server, service registry or message bus.
- The endpoints have no access control and the server speaks plain HTTP
  only.
- Data lives in whole JSON files that are read and rewritten on each
  request; there is no database and no locking between processes.