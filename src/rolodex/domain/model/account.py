"""Registered accounts and the identifiers they own.

Identity management (adding, verifying and publishing identifiers) happens outside
the resolution engine; these methods model what that collaborator does so the
directories have something realistic to serve.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import uuid4

from rolodex.domain.model.enums import IdentifierKind, Visibility
from rolodex.domain.model.identifiers import StoredIdentifier
from rolodex.domain.model.primitives import AccountId, Username  # noqa: TC001


class IdentifierNotFoundError(LookupError):
    """Raised when an account does not hold the requested identifier."""


def _new_account_id() -> AccountId:
    return uuid4().hex


@dataclass(eq=False, kw_only=True)
class Account:
    username: Username
    account_id: AccountId = field(default_factory=_new_account_id)

    _identifiers: list[StoredIdentifier] = field(
        default_factory=list["StoredIdentifier"], repr=False
    )

    @property
    def identifiers(self) -> tuple[StoredIdentifier, ...]:
        return tuple(self._identifiers)

    def add_phone_number(
        self,
        phone_number: str,
        *,
        visibility: Visibility = Visibility.PRIVATE,
    ) -> StoredIdentifier:
        return self._add(IdentifierKind.PHONE, phone_number, visibility)

    def add_email(
        self,
        email: str,
        *,
        visibility: Visibility = Visibility.PRIVATE,
    ) -> StoredIdentifier:
        return self._add(IdentifierKind.EMAIL, email, visibility)

    def verify(self, kind: IdentifierKind, value: str) -> None:
        self.identifier(kind, value).verified = True

    def set_visibility(self, kind: IdentifierKind, value: str, visibility: Visibility) -> None:
        self.identifier(kind, value).visibility = visibility

    def remove_identifier(self, kind: IdentifierKind, value: str) -> None:
        self._identifiers.remove(self.identifier(kind, value))

    def identifier(self, kind: IdentifierKind, value: str) -> StoredIdentifier:
        for stored in self._identifiers:
            if stored.kind is kind and stored.value == value:
                return stored
        raise IdentifierNotFoundError(f"{self.username} has no {kind} {value!r}")

    def _add(self, kind: IdentifierKind, value: str, visibility: Visibility) -> StoredIdentifier:
        for stored in self._identifiers:
            if stored.kind is kind and stored.value == value:
                # re-adding only updates visibility, verification is kept
                stored.visibility = visibility
                return stored
        stored = StoredIdentifier(kind=kind, value=value, visibility=visibility)
        self._identifiers.append(stored)
        return stored
