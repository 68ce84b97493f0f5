"""macstore command-line interface."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Callable, List, Optional

from rich.console import Console
from rich.table import Table

from macstore.address import parse_mac
from macstore.config import StoreConfig
from macstore.database import Database, set_default_database_url
from macstore.models import MacRecord
from macstore.store import MISSING, MacRecordStore

Handler = Callable[[MacRecordStore, argparse.Namespace], int]


def _print_json(data: Any) -> None:
	json.dump(data, sys.stdout, indent=2)
	sys.stdout.write("\n")


def _print_records(records: List[MacRecord], *, title: str) -> None:
	table = Table(title=title, show_lines=False)
	for column in ("address", "attempts", "successful", "active"):
		table.add_column(column.upper())
	for record in records:
		table.add_row(
			record.address,
			str(record.attempts),
			str(record.successful),
			"yes" if record.active else "no",
		)
	Console().print(table)


def _count(text: str) -> int:
	value = int(text)
	if value < 0:
		raise argparse.ArgumentTypeError(f"count must not be negative: {value}")
	return value


def _report(ok: bool, message: str) -> int:
	stream = sys.stdout if ok else sys.stderr
	stream.write(message + "\n")
	return 0 if ok else 1


def _cmd_list(store: MacRecordStore, args: argparse.Namespace) -> int:
	records = store.fetch_active() if args.active else store.fetch_all()
	if args.json:
		_print_json([record.to_dict() for record in records])
	else:
		_print_records(records, title="Active MAC addresses" if args.active else "MAC addresses")
	return 0


def _cmd_show(store: MacRecordStore, args: argparse.Namespace) -> int:
	record = store.fetch_one(args.mac)
	if record is None:
		return _report(False, f"{args.address}: not found")
	if args.json:
		_print_json(record.to_dict())
	else:
		_print_records([record], title=record.address)
	return 0


def _cmd_add(store: MacRecordStore, args: argparse.Namespace) -> int:
	row_id = store.create(args.mac, not args.inactive)
	if row_id == MISSING:
		return _report(False, f"{args.address}: already stored or insert failed")
	return _report(True, f"{args.address}: created (row {row_id})")


def _cmd_activate(store: MacRecordStore, args: argparse.Namespace) -> int:
	return _report(store.set_active(args.mac, True), f"{args.address}: activate")


def _cmd_deactivate(store: MacRecordStore, args: argparse.Namespace) -> int:
	return _report(store.set_active(args.mac, False), f"{args.address}: deactivate")


def _cmd_deactivate_all(store: MacRecordStore, args: argparse.Namespace) -> int:
	return _report(store.deactivate_all(), "deactivate-all")


def _cmd_attempt(store: MacRecordStore, args: argparse.Namespace) -> int:
	if not store.increment_attempts(args.mac, args.count):
		return _report(False, f"{args.address}: not found")
	return _report(True, f"{args.address}: attempts={store.get_attempts(args.mac)}")


def _cmd_success(store: MacRecordStore, args: argparse.Namespace) -> int:
	if not store.increment_successful(args.mac, args.count):
		return _report(False, f"{args.address}: not found")
	return _report(True, f"{args.address}: successful={store.get_successful(args.mac)}")


def _cmd_delete(store: MacRecordStore, args: argparse.Namespace) -> int:
	return _report(store.delete(args.mac), f"{args.address}: delete")


def _serve(config: StoreConfig, args: argparse.Namespace) -> int:
	import uvicorn

	set_default_database_url(config.database_url)
	uvicorn.run(
		"macstore.api:app",
		host=args.host or config.api_host,
		port=args.port or config.api_port,
	)
	return 0


def _build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(description="Manage stored MAC address records")
	parser.add_argument("--db", help="SQLAlchemy database URL (default: $MACSTORE_DATABASE_URL)")
	parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
	sub = parser.add_subparsers(dest="command", required=True)

	def with_address(name: str, help_text: str, handler: Handler) -> argparse.ArgumentParser:
		command = sub.add_parser(name, help=help_text)
		command.add_argument("address", help="MAC address, e.g. AA:BB:CC:DD:EE:FF")
		command.set_defaults(handler=handler)
		return command

	listing = sub.add_parser("list", help="List stored addresses")
	listing.add_argument("--active", action="store_true", help="Only active addresses")
	listing.add_argument("--json", action="store_true", help="Output JSON")
	listing.set_defaults(handler=_cmd_list)

	show = with_address("show", "Show one address", _cmd_show)
	show.add_argument("--json", action="store_true", help="Output JSON")

	add = with_address("add", "Store a new address", _cmd_add)
	add.add_argument("--inactive", action="store_true", help="Store the address as inactive")

	with_address("activate", "Mark an address active", _cmd_activate)
	with_address("deactivate", "Mark an address inactive", _cmd_deactivate)

	deactivate_all = sub.add_parser("deactivate-all", help="Mark every address inactive")
	deactivate_all.set_defaults(handler=_cmd_deactivate_all)

	attempt = with_address("attempt", "Record connection attempts", _cmd_attempt)
	attempt.add_argument("--count", type=_count, default=1, help="Attempts to add")
	success = with_address("success", "Record successful connections", _cmd_success)
	success.add_argument("--count", type=_count, default=1, help="Successful connections to add")

	with_address("delete", "Remove an address", _cmd_delete)

	serve = sub.add_parser("serve", help="Run the HTTP API with uvicorn")
	serve.add_argument("--host", help="Bind address (default: $MACSTORE_API_HOST)")
	serve.add_argument("--port", type=int, help="Port (default: $MACSTORE_API_PORT)")
	serve.set_defaults(handler=None)

	return parser


def main(argv: Optional[List[str]] = None) -> int:
	parser = _build_parser()
	args = parser.parse_args(argv)
	logging.basicConfig(
		level=logging.DEBUG if args.verbose else logging.WARNING,
		format="%(asctime)s %(levelname)s %(name)s: %(message)s",
	)

	config = StoreConfig.from_env()
	if args.db:
		config.database_url = args.db

	if args.command == "serve":
		return _serve(config, args)

	address = getattr(args, "address", None)
	if address is not None:
		try:
			args.mac = parse_mac(address)
		except ValueError as exc:
			parser.error(str(exc))

	with Database.from_config(config) as database:
		store = MacRecordStore(database.engine)
		return args.handler(store, args)


if __name__ == "__main__":
	sys.exit(main())
