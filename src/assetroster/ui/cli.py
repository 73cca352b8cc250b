# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from assetroster.app import import_roster_file, open_asset_store
from assetroster.config import ConfigurationError, configure_logging
from assetroster.domain.errors import (
    AssetNotFoundError,
    NoValidRowsError,
    RecordValidationError,
    RosterImportError,
    StoreError,
)
from assetroster.domain.ingest import coerce_ordinal

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from types import FrameType

    from assetroster.domain.model import AssetRecord
    from assetroster.domain.store import AssetStore

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage the local asset roster")
    parser.add_argument(
        "--database-uri",
        type=str,
        help="SQLAlchemy database URI (defaults to DATABASE_URI or the data directory)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    import_cmd = subparsers.add_parser("import", help="Import a .csv or .xlsx roster")
    import_cmd.add_argument("path", type=str, help="Roster file to import")
    import_cmd.add_argument(
        "--media-type",
        type=str,
        help="Declared media type, used when the file name has no known extension",
    )

    list_cmd = subparsers.add_parser("list", help="Print stored records")
    list_cmd.add_argument(
        "--recent",
        type=int,
        help="Only print the N most recently modified records",
    )

    edit = subparsers.add_parser("edit", help="Edit a stored record")
    edit.add_argument("staff_id", type=str, help="Staff ID of the record (cannot change)")
    edit.add_argument("--full-name", type=str, help="New full name")
    edit.add_argument("--organization", type=str, help="New organization name")
    edit.add_argument("--no", type=str, help="New display number (empty to clear)")

    delete = subparsers.add_parser("delete", help="Delete one or more records")
    delete.add_argument("staff_ids", nargs="+", help="Staff IDs to delete")
    delete.add_argument("-y", "--yes", action="store_true", help="Skip confirmation")

    clear = subparsers.add_parser("clear", help="Delete every stored record")
    clear.add_argument("-y", "--yes", action="store_true", help="Skip confirmation")

    return parser.parse_args(list(argv))


def _prompt(message: str) -> bool:
    try:
        answer = input(f"{message} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in {"y", "yes"}


def _format_record(record: AssetRecord) -> str:
    no = "" if record.no is None else str(record.no)
    return "\t".join((no, record.staff_id, record.full_name, record.organization_name))


def _run_import(store: AssetStore, args: argparse.Namespace) -> None:
    result = import_roster_file(args.path, store=store, media_type=args.media_type)
    for rejected in result.rejected:
        log.warning("Row %s not imported: %s", rejected.row_number, rejected.reason)
    log.info(
        "Imported %s row(s) (%s distinct staff IDs, %s rejected, %s skipped)",
        result.imported_count,
        len(result.records),
        len(result.rejected),
        result.dropped_rows,
    )


def _run_list(store: AssetStore, args: argparse.Namespace) -> None:
    if args.recent is not None:
        records = store.recent(args.recent)
    else:
        records = sorted(store.scan(), key=lambda record: record.staff_id)
    for record in records:
        print(_format_record(record))


def _is_number(text: str) -> bool:
    try:
        float(text)
    except ValueError:
        return False
    return True


def _run_edit(store: AssetStore, args: argparse.Namespace) -> None:
    changes: dict[str, object] = {}
    if args.full_name is not None:
        changes["full_name"] = args.full_name.strip()
    if args.organization is not None:
        changes["organization_name"] = args.organization.strip()
    if args.no is not None:
        no = coerce_ordinal(args.no)
        if no is None and args.no.strip() and not _is_number(args.no):
            raise ValueError(f"--no expects a number or an empty string, got {args.no!r}")
        changes["no"] = no
    if not changes:
        raise ValueError("Nothing to edit: pass --full-name, --organization or --no")
    record = store.edit(args.staff_id, **changes)
    log.info("Updated %s", record.staff_id)


def _run_delete(
    store: AssetStore,
    args: argparse.Namespace,
    confirm: Callable[[str], bool],
) -> None:
    staff_ids: list[str] = args.staff_ids
    if len(staff_ids) > 1 and not args.yes and not confirm(f"Delete {len(staff_ids)} records?"):
        log.info("Delete cancelled")
        return
    removed = store.bulk_delete(staff_ids)
    log.info("Deleted %s record(s)", removed)


def _run_clear(
    store: AssetStore,
    args: argparse.Namespace,
    confirm: Callable[[str], bool],
) -> None:
    if not args.yes and not confirm("Delete every stored record?"):
        log.info("Clear cancelled")
        return
    removed = store.clear()
    log.info("Cleared %s record(s)", removed)


def main(
    argv: Sequence[str] | None = None,
    *,
    confirm: Callable[[str], bool] = _prompt,
) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    try:
        configure_logging(level=logging.DEBUG if parsed_args.verbose else None)
    except ConfigurationError:
        configure_logging(level=logging.INFO)
        log.exception("Invalid logging configuration")
        sys.exit(2)

    try:
        store = open_asset_store(database_uri=parsed_args.database_uri)
        if parsed_args.command == "import":
            _run_import(store, parsed_args)
        elif parsed_args.command == "list":
            _run_list(store, parsed_args)
        elif parsed_args.command == "edit":
            _run_edit(store, parsed_args)
        elif parsed_args.command == "delete":
            _run_delete(store, parsed_args, confirm)
        elif parsed_args.command == "clear":
            _run_clear(store, parsed_args, confirm)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except NoValidRowsError as exc:
        for rejected in exc.rejected:
            log.warning("Row %s not imported: %s", rejected.row_number, rejected.reason)
        log.error("%s", exc)  # noqa: TRY400
        sys.exit(1)
    except (RosterImportError, AssetNotFoundError) as exc:
        log.error("%s", exc)  # noqa: TRY400
        sys.exit(1)
    except (RecordValidationError, ValueError) as exc:
        log.error("Invalid input: %s", exc)  # noqa: TRY400
        sys.exit(2)
    except StoreError:
        log.exception("Asset store failure")
        sys.exit(1)
    except Exception:
        log.exception("Fatal error")
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
