from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING, Any, cast

from dotenv import load_dotenv

from rolodex.app import bulk_lookup_contacts, lookup_contact_list, register_account
from rolodex.config import configure_logging
from rolodex.domain.model import Contact, ContactComponent, Visibility

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Resolve address-book entries to accounts")
    subparsers = parser.add_subparsers(dest="command", required=True)

    lookup = subparsers.add_parser("lookup", help="Look up flat lists of emails and phones")
    lookup.add_argument(
        "--email",
        action="append",
        default=[],
        help="Email address to look up (repeatable)",
    )
    lookup.add_argument(
        "--phone",
        action="append",
        default=[],
        help="Phone number to look up, with or without country prefix (repeatable)",
    )
    lookup.add_argument(
        "--region",
        type=str,
        help="Region hint for phone numbers without a country prefix (e.g. US)",
    )

    contacts = subparsers.add_parser("contacts", help="Resolve a JSON contact list")
    contacts.add_argument("path", type=Path, help="JSON file holding the contact list")
    contacts.add_argument(
        "--region",
        type=str,
        help="Region hint for phone numbers without a country prefix (e.g. US)",
    )

    account = subparsers.add_parser("account", help="Account management commands")
    account_sub = account.add_subparsers(dest="account_command", required=True)
    account_create = account_sub.add_parser("create", help="Register an account")
    account_create.add_argument("--username", type=str, required=True)
    account_create.add_argument("--email", action="append", default=[])
    account_create.add_argument("--phone", action="append", default=[])
    account_create.add_argument(
        "--public",
        action="store_true",
        help="Make the identifiers visible to lookups",
    )
    account_create.add_argument(
        "--verified",
        action="store_true",
        help="Mark the identifiers as verified",
    )

    return parser.parse_args(list(argv))


def _load_contacts(path: Path) -> list[Contact]:
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ValueError(f"Cannot read contact list {path}: {exc}") from exc
    if not isinstance(document, list):
        raise ValueError("Contact list must be a JSON array")
    return [_parse_contact(entry) for entry in cast(list[Any], document)]


def _parse_contact(entry: object) -> Contact:
    if not isinstance(entry, dict):
        raise ValueError(f"Contact entries must be objects, got {entry!r}")
    data = cast(dict[str, Any], entry)
    components: list[ContactComponent] = []
    for component in data.get("components", []):
        if not isinstance(component, dict):
            raise ValueError(f"Contact components must be objects, got {component!r}")
        fields = cast(dict[str, Any], component)
        components.append(
            ContactComponent(
                phone_number=_optional_text(fields, "phone"),
                email=_optional_text(fields, "email"),
                label=_optional_text(fields, "label"),
            )
        )
    return Contact(name=str(data.get("name", "")), components=tuple(components))


def _optional_text(fields: dict[str, Any], name: str) -> str | None:
    value = fields.get(name)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"Contact component {name!r} must be a string, got {value!r}")
    return value


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        contacts = _load_contacts(parsed_args.path) if parsed_args.command == "contacts" else []
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "lookup":
            results = bulk_lookup_contacts(
                parsed_args.email,
                parsed_args.phone,
                parsed_args.region,
            )
            for key, match in sorted(results.items()):
                suffix = f" (coerced to {match.coerced})" if match.coerced else ""
                print(f"{key}\t{match.account_id}{suffix}")  # noqa: T201
            for raw in results.rejected:
                log.warning("Skipped invalid %s %r", raw.kind, raw.value)
        elif parsed_args.command == "contacts":
            for resolution in lookup_contact_list(contacts, parsed_args.region):
                outcome = resolution.account_id if resolution.resolved else "-"
                line = f"{resolution.contact_index}\t{resolution.contact_name}\t{outcome}"
                print(line)  # noqa: T201
        elif parsed_args.command == "account" and parsed_args.account_command == "create":
            account = register_account(
                username=parsed_args.username,
                phone_numbers=parsed_args.phone,
                emails=parsed_args.email,
                visibility=Visibility.PUBLIC if parsed_args.public else Visibility.PRIVATE,
                verified=parsed_args.verified,
            )
            log.info("Created account %s", account.account_id)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during lookup")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
