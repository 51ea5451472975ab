"""Address-book contacts and their resolution outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field

from rolodex.domain.model.identifiers import RawIdentifier
from rolodex.domain.model.primitives import AccountId  # noqa: TC001


@dataclass(frozen=True, slots=True, kw_only=True)
class ContactComponent:
    """One phone number or email address of a contact.

    XOR: exactly one of ``phone_number`` / ``email`` is set.
    """

    phone_number: str | None = None
    email: str | None = None
    label: str | None = None

    def __post_init__(self) -> None:
        if (self.phone_number is None) == (self.email is None):
            raise ValueError("ContactComponent requires exactly one of phone_number or email")

    @property
    def identifier(self) -> RawIdentifier:
        if self.phone_number is not None:
            return RawIdentifier.phone(self.phone_number)
        if self.email is not None:
            return RawIdentifier.email(self.email)
        raise ValueError("ContactComponent requires exactly one of phone_number or email")


@dataclass(frozen=True, slots=True)
class Contact:
    name: str
    components: tuple[ContactComponent, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True, kw_only=True)
class ContactResolution:
    contact_index: int
    contact_name: str
    resolved: bool = False
    account_id: AccountId | None = None
    component: ContactComponent | None = None
    coerced: str = ""
