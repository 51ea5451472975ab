"""SQLAlchemy table metadata for accounts and their stored identifiers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    UniqueConstraint,
)

from rolodex.domain.model import IdentifierKind, Visibility

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

account_table = Table(
    "account",
    metadata,
    Column("account_id", String(64), primary_key=True),
    Column("username", String, nullable=False),
)

# ``lookup_value`` is the canonical form computed when the identifier is saved;
# NULL when the stored value does not normalize and can never be matched.
account_identifier_table = Table(
    "account_identifier",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "account_id",
        String(64),
        ForeignKey("account.account_id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("position", Integer, nullable=False),
    Column("kind", Enum(IdentifierKind, native_enum=False, length=16), nullable=False),
    Column("value", String, nullable=False),
    Column("lookup_value", String, nullable=True),
    Column(
        "visibility",
        Enum(Visibility, native_enum=False, length=16),
        nullable=False,
        default=Visibility.PRIVATE,
    ),
    Column("verified", Boolean, nullable=False, default=False),
    UniqueConstraint("account_id", "kind", "value"),
    Index("ix_account_identifier_lookup", "kind", "lookup_value"),
)


def create_all_tables(engine: Engine) -> None:
    log.debug("Creating account tables on %s", engine.url)
    metadata.create_all(engine)
