import json

import pytest

from checkout_services.authentication.controller import Controller, main
from checkout_services.authentication.models import (
    ACCOUNTS_FILE_NAME,
    CARDS_FILE_NAME,
    PEOPLE_FILE_NAME,
    Account,
    Accounts,
    AuthData,
    Card,
    Cards,
    People,
    Person,
)
from checkout_services.service import AppService, Request, ServiceError

TS = 1560815799


def setup_people():
    rows = [
        (1, 1, True),
        (2, 2, False),
        (3, 3, True),
        (4, 4, False),
        (5, -1, True),
        (6, 6, True),
        (7, 7, False),
    ]
    return People(
        people=[
            Person(
                person_id=pid,
                account_id=aid,
                full_name=f"Test Person {pid}",
                created_at=TS,
                updated_at=TS,
                is_active=active,
            )
            for pid, aid, active in rows
        ]
    )


def setup_accounts():
    actives = [True, True, False, True, True]
    return Accounts(
        accounts=[
            Account(
                account_id=i,
                address=f"{i} Test Lane",
                credit_card_number=f"card-{i}",
                phone_number=f"phone-{i}",
                email_address=f"test{i}@example.com",
                created_at=TS,
                updated_at=TS,
                is_active=active,
            )
            for i, active in enumerate(actives, start=1)
        ]
    )


def setup_cards():
    rows = [
        ("TESTCARD01", 1, True, 1),
        ("TESTCARD02", 2, True, 2),
        ("TESTCARD03", 3, True, 3),
        ("TESTCARD04", 1, False, 4),
        ("TESTCARD05", 1, True, -1),
        ("TESTCARD06", 1, True, 5),
        ("TEST000000", 1, True, 1),
    ]
    return Cards(
        cards=[
            Card(
                card_id=cid,
                role_id=role,
                is_valid=valid,
                person_id=pid,
                created_at=TS,
                updated_at=TS,
            )
            for cid, role, valid, pid in rows
        ]
    )


@pytest.fixture
def controller(tmp_path):
    setup_people().write(tmp_path / PEOPLE_FILE_NAME)
    setup_accounts().write(tmp_path / ACCOUNTS_FILE_NAME)
    setup_cards().write(tmp_path / CARDS_FILE_NAME)
    return Controller(AppService("ms-authentication"), tmp_path)


def call(controller, card_id):
    request = Request(
        method="GET", path=f"/authentication/{card_id}", vars={"cardid": card_id}
    )
    response = controller.authentication_get(request)
    return response, json.loads(response.body)


def test_add_all_routes_valid_case(controller):
    controller.add_all_routes()
    response = controller.service.dispatch("GET", "/authentication/TESTCARD01")
    assert response.status_code == 200


def test_add_all_routes_invalid_case(controller):
    controller.add_all_routes()
    with pytest.raises(ServiceError, match="error adding route"):
        controller.add_all_routes()


def test_successful_auth_sequence(controller):
    response, envelope = call(controller, "TESTCARD01")
    assert response.status_code == 200
    assert envelope["error"] is False
    auth = AuthData.from_dict(json.loads(envelope["content"]))
    assert auth == AuthData(account_id=1, person_id=1, role_id=1, card_id="TESTCARD01")


@pytest.mark.parametrize(
    "card_id, status, message",
    [
        ("00", 400, "Please pass in a 10-character card ID"),
        ("TESTCARD02", 401, "Card ID is associated with an inactive person"),
        ("TESTCARD03", 401, "Card ID is associated with an inactive account"),
        ("TESTCARD04", 401, "Card ID is not a valid card"),
        ("ffffffffff", 401, "Card ID is not an authorized card"),
        ("TESTCARD05", 401, "Card ID is associated with an unknown person"),
        ("TESTCARD06", 401, "Card ID is associated with an unknown account"),
    ],
)
def test_rejected_cards(controller, card_id, status, message):
    response, envelope = call(controller, card_id)
    assert response.status_code == status
    assert envelope["statusCode"] == status
    assert envelope["content"].startswith(message)
    assert envelope["error"] is False


@pytest.mark.parametrize(
    "file_name, message",
    [
        (CARDS_FILE_NAME, "Failed to read authentication data"),
        (ACCOUNTS_FILE_NAME, "Failed to read accounts data"),
        (PEOPLE_FILE_NAME, "Failed to read people data"),
    ],
)
def test_invalid_json_files(controller, tmp_path, file_name, message):
    (tmp_path / file_name).write_text("invalid json test")
    response, envelope = call(controller, "TESTCARD01")
    assert response.status_code == 500
    assert envelope["content"] == message
    assert envelope["error"] is True


def test_dispatch_without_card_id_is_not_routed(controller):
    controller.add_all_routes()
    response = controller.service.dispatch("GET", "/authentication/")
    assert response.status_code == 404


def test_main_rejects_bad_port():
    with pytest.raises(SystemExit):
        main(["--port", "not-a-number"])