"""HTTP endpoint that resolves a card into its role, person and account."""

from __future__ import annotations

import argparse
import logging
import os
import sys

from checkout_services.authentication.models import (
    ACCOUNTS_FILE_NAME,
    CARDS_FILE_NAME,
    PEOPLE_FILE_NAME,
    Account,
    AuthData,
    Person,
    load_accounts,
    load_cards,
    load_people,
)
from checkout_services.service import (
    AppService,
    Request,
    Response,
    ServiceError,
    json_response,
    string_response,
    to_json,
)

SERVICE_KEY = "ms-authentication"
CARD_ID_LENGTH = 10
_BAD_CARD_MESSAGE = (
    "Please pass in a 10-character card ID as a URL parameter, "
    "like this: /authentication/0001230001"
)

log = logging.getLogger(__name__)


class Controller:
    """Serves the authentication endpoint from JSON files in a data directory."""

    def __init__(self, service: AppService, data_dir: str | os.PathLike = ".") -> None:
        self.service = service
        self.data_dir = os.fspath(data_dir)

    @property
    def cards_path(self) -> str:
        return os.path.join(self.data_dir, CARDS_FILE_NAME)

    @property
    def accounts_path(self) -> str:
        return os.path.join(self.data_dir, ACCOUNTS_FILE_NAME)

    @property
    def people_path(self) -> str:
        return os.path.join(self.data_dir, PEOPLE_FILE_NAME)

    def add_all_routes(self) -> None:
        """Register every endpoint of this controller with the service."""
        try:
            self.service.add_route(
                "/authentication/{cardid}", self.authentication_get, "GET"
            )
        except ServiceError as exc:
            raise ServiceError(f"error adding route: {exc}") from exc

    def authentication_get(self, request: Request) -> Response:
        """Look up the person and account for a 10-character card ID."""
        card_id = request.vars.get("cardid", "")
        if len(card_id) != CARD_ID_LENGTH:
            log.info(_BAD_CARD_MESSAGE)
            return string_response(400, _BAD_CARD_MESSAGE, False)

        try:
            cards = load_cards(self.cards_path)
        except ServiceError as exc:
            log.error("Failed to read authentication data: %s", exc)
            return string_response(500, "Failed to read authentication data", True)

        card = cards.get_card_by_card_id(card_id)
        if card is None:
            log.info("CardID: %s is not an authorized card", card_id)
            return string_response(401, "Card ID is not an authorized card", False)
        if not card.is_valid:
            log.info("CardID: %s is not an valid card", card_id)
            return string_response(401, "Card ID is not a valid card", False)

        try:
            accounts = load_accounts(self.accounts_path)
        except ServiceError as exc:
            log.error("Failed to read accounts data: %s", exc)
            return string_response(500, "Failed to read accounts data", True)
        try:
            people = load_people(self.people_path)
        except ServiceError as exc:
            log.error("Failed to read people data: %s", exc)
            return string_response(500, "Failed to read people data", True)

        auth_data = AuthData(card_id=card_id, role_id=card.role_id)

        # A missing record behaves like an empty one, so an ID of zero
        # resolves to an inactive entry rather than an unknown one.
        person = people.get_person_by_person_id(card.person_id) or Person()
        if person.person_id != card.person_id:
            log.info("CardID is associated with an unknown person %s", person.person_id)
            return string_response(
                401, "Card ID is associated with an unknown person", False
            )
        if not person.is_active:
            log.info("CardID is associated with an inactive person %s", person.person_id)
            return string_response(
                401, "Card ID is associated with an inactive person", False
            )
        auth_data.person_id = person.person_id

        account = accounts.get_account_by_account_id(person.account_id) or Account()
        if account.account_id != person.account_id:
            log.info("CardID is associated with an unknown account %s", person.account_id)
            return string_response(
                401, "Card ID is associated with an unknown account", False
            )
        if not account.is_active:
            log.info("CardID is associated with an inactive account %s", person.account_id)
            return string_response(
                401, "Card ID is associated with an inactive account", False
            )
        auth_data.account_id = account.account_id

        log.info("Successfully authenticated person and card")
        return json_response(200, to_json(auth_data), False)


def main(argv: list[str] | None = None) -> int:
    """Start the authentication service."""
    parser = argparse.ArgumentParser(prog=SERVICE_KEY, description=__doc__)
    parser.add_argument("--data-dir", default=".", help="directory holding the JSON files")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=48096)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    service = AppService(SERVICE_KEY)
    controller = Controller(service, args.data_dir)
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