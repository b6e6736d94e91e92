"""Cards, people and accounts used to authenticate a card holder."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

from checkout_services.service import ServiceError, load_json_file, write_json_file

PEOPLE_FILE_NAME = "people.json"
ACCOUNTS_FILE_NAME = "accounts.json"
CARDS_FILE_NAME = "cards.json"

PathLike = str | os.PathLike
T = TypeVar("T")


def _timestamp(value: Any) -> int:
    """Decode a timestamp that is stored as a JSON string."""
    if value is None:
        return 0
    if isinstance(value, str):
        return int(value)
    raise ValueError(f"timestamp must be encoded as a string, got {value!r}")


@dataclass
class Card:
    """Associates a card with one role and one person."""

    card_id: str = ""
    role_id: int = 0
    is_valid: bool = False
    person_id: int = 0
    created_at: int = 0
    updated_at: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Card:
        return cls(
            card_id=str(data.get("cardID") or ""),
            role_id=int(data.get("roleID") or 0),
            is_valid=bool(data.get("isValid", False)),
            person_id=int(data.get("personID") or 0),
            created_at=_timestamp(data.get("createdAt")),
            updated_at=_timestamp(data.get("updatedAt")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "cardID": self.card_id,
            "roleID": self.role_id,
            "isValid": self.is_valid,
            "personID": self.person_id,
            "createdAt": str(self.created_at),
            "updatedAt": str(self.updated_at),
        }


@dataclass
class Person:
    """A person belonging to one account."""

    person_id: int = 0
    account_id: int = 0
    full_name: str = ""
    created_at: int = 0
    updated_at: int = 0
    is_active: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Person:
        return cls(
            person_id=int(data.get("personID") or 0),
            account_id=int(data.get("accountID") or 0),
            full_name=str(data.get("fullName") or ""),
            created_at=_timestamp(data.get("createdAt")),
            updated_at=_timestamp(data.get("updatedAt")),
            is_active=bool(data.get("isActive", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "personID": self.person_id,
            "accountID": self.account_id,
            "fullName": self.full_name,
            "createdAt": str(self.created_at),
            "updatedAt": str(self.updated_at),
            "isActive": self.is_active,
        }


@dataclass
class Account:
    """Payment and billing information shared by one or more people."""

    account_id: int = 0
    address: str = ""
    credit_card_number: str = ""
    phone_number: str = ""
    email_address: str = ""
    created_at: int = 0
    updated_at: int = 0
    is_active: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Account:
        return cls(
            account_id=int(data.get("accountID") or 0),
            address=str(data.get("address") or ""),
            credit_card_number=str(data.get("creditCardNumber") or ""),
            phone_number=str(data.get("phoneNumber") or ""),
            email_address=str(data.get("emailAddress") or ""),
            created_at=_timestamp(data.get("createdAt")),
            updated_at=_timestamp(data.get("updatedAt")),
            is_active=bool(data.get("isActive", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "accountID": self.account_id,
            "address": self.address,
            "creditCardNumber": self.credit_card_number,
            "phoneNumber": self.phone_number,
            "emailAddress": self.email_address,
            "createdAt": str(self.created_at),
            "updatedAt": str(self.updated_at),
            "isActive": self.is_active,
        }


@dataclass
class AuthData:
    """The role, person and account resolved for a card."""

    account_id: int = 0
    person_id: int = 0
    role_id: int = 0
    card_id: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AuthData:
        return cls(
            account_id=int(data.get("accountID") or 0),
            person_id=int(data.get("personID") or 0),
            role_id=int(data.get("roleID") or 0),
            card_id=str(data.get("cardID") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "accountID": self.account_id,
            "personID": self.person_id,
            "roleID": self.role_id,
            "cardID": self.card_id,
        }


def _first(items: list[T], predicate: Callable[[T], bool]) -> T | None:
    return next((item for item in items if predicate(item)), None)


def _remove_first(items: list[T], predicate: Callable[[T], bool]) -> None:
    for index, item in enumerate(items):
        if predicate(item):
            del items[index]
            return


@dataclass
class Cards:
    """The list of known cards."""

    cards: list[Card] = field(default_factory=list)

    def write(self, path: PathLike = CARDS_FILE_NAME) -> None:
        write_json_file(path, {"cards": [c.to_dict() for c in self.cards]})

    def delete_card(self, card: Card) -> None:
        _remove_first(self.cards, lambda c: c.card_id == card.card_id)

    def get_card_by_card_id(self, card_id: str) -> Card | None:
        return _first(self.cards, lambda c: c.card_id == card_id)

    def get_card_by_role_id(self, role_id: int) -> Card | None:
        return _first(self.cards, lambda c: c.role_id == role_id)

    def get_card_by_person_id(self, person_id: int) -> Card | None:
        return _first(self.cards, lambda c: c.person_id == person_id)


@dataclass
class People:
    """The list of known people."""

    people: list[Person] = field(default_factory=list)

    def write(self, path: PathLike = PEOPLE_FILE_NAME) -> None:
        write_json_file(path, {"people": [p.to_dict() for p in self.people]})

    def delete_person(self, person: Person) -> None:
        _remove_first(self.people, lambda p: p.person_id == person.person_id)

    def get_person_by_person_id(self, person_id: int) -> Person | None:
        return _first(self.people, lambda p: p.person_id == person_id)

    def get_person_by_account_id(self, account_id: int) -> Person | None:
        return _first(self.people, lambda p: p.account_id == account_id)

    def get_person_by_full_name(self, full_name: str) -> Person | None:
        return _first(self.people, lambda p: p.full_name == full_name)


@dataclass
class Accounts:
    """The list of known accounts."""

    accounts: list[Account] = field(default_factory=list)

    def write(self, path: PathLike = ACCOUNTS_FILE_NAME) -> None:
        write_json_file(path, {"accounts": [a.to_dict() for a in self.accounts]})

    def delete_account(self, account: Account) -> None:
        _remove_first(self.accounts, lambda a: a.account_id == account.account_id)

    def get_account_by_account_id(self, account_id: int) -> Account | None:
        return _first(self.accounts, lambda a: a.account_id == account_id)

    def get_account_by_address(self, address: str) -> Account | None:
        return _first(self.accounts, lambda a: a.address == address)

    def get_account_by_credit_card_number(self, credit_card_number: str) -> Account | None:
        return _first(self.accounts, lambda a: a.credit_card_number == credit_card_number)

    def get_account_by_phone_number(self, phone_number: str) -> Account | None:
        return _first(self.accounts, lambda a: a.phone_number == phone_number)

    def get_account_by_email_address(self, email_address: str) -> Account | None:
        return _first(self.accounts, lambda a: a.email_address == email_address)


def _load_list(path: PathLike, kind: str, item_cls: Any) -> list[Any]:
    try:
        data = load_json_file(path)
        if data is None:
            return []
        if not isinstance(data, dict):
            raise ValueError("expected a JSON object")
        return [item_cls.from_dict(item) for item in data.get(kind) or []]
    except (ServiceError, ValueError, TypeError, AttributeError) as exc:
        raise ServiceError(f"Failed to load {kind} from JSON file: {exc}") from exc


def load_people(path: PathLike = PEOPLE_FILE_NAME) -> People:
    """Read people from their JSON file."""
    return People(people=_load_list(path, "people", Person))


def load_accounts(path: PathLike = ACCOUNTS_FILE_NAME) -> Accounts:
    """Read accounts from their JSON file."""
    return Accounts(accounts=_load_list(path, "accounts", Account))


def load_cards(path: PathLike = CARDS_FILE_NAME) -> Cards:
    """Read cards from their JSON file."""
    return Cards(cards=_load_list(path, "cards", Card))


def delete_people(path: PathLike = PEOPLE_FILE_NAME) -> None:
    """Replace the people file with an empty list."""
    People().write(path)


def delete_accounts(path: PathLike = ACCOUNTS_FILE_NAME) -> None:
    """Replace the accounts file with an empty list."""
    Accounts().write(path)


def delete_cards(path: PathLike = CARDS_FILE_NAME) -> None:
    """Replace the cards file with an empty list."""
    Cards().write(path)