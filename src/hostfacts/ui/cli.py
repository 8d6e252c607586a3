from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from hostfacts.adapters.upload import PayloadError, load_payload
from hostfacts.app import import_host_facts, list_importers
from hostfacts.config import ConfigurationError, configure_logging
from hostfacts.domain.errors import FactImportError, HostNotFoundError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile reported host facts")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log per-phase details",
    )
    # Accepted after the subcommand too; SUPPRESS keeps a leading -v intact.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Log per-phase details",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    upload = subparsers.add_parser(
        "import", parents=[common], help="Import a JSON fact upload document"
    )
    upload.add_argument("path", type=Path, help="Path to the upload document")
    upload.add_argument(
        "--type",
        dest="importer_type",
        type=str,
        help="Importer key overriding the document's type",
    )
    upload.add_argument(
        "--host",
        type=str,
        help="Host name overriding the document's name/certname",
    )

    subparsers.add_parser("importers", parents=[common], help="List registered fact importers")
    return parser.parse_args(list(argv))


def _run_import(args: argparse.Namespace) -> None:
    payload = load_payload(args.path)
    overrides: dict[str, object] = {}
    if args.importer_type:
        overrides["importer_type"] = args.importer_type
    if args.host:
        overrides["name"] = args.host
        overrides["certname"] = None
    if overrides:
        payload = payload.model_copy(update=overrides)

    counters = import_host_facts(payload)
    log.info(
        "Fact import finished for %s: added=%s, updated=%s, deleted=%s",
        payload.host_name,
        counters.added,
        counters.updated,
        counters.deleted,
    )


def _run_list() -> None:
    for info in list_importers():
        features = ", ".join(info.features) or "-"
        log.info("%s: %s (features: %s)", info.key, info.importer, features)


def main(argv: Sequence[str] | None = None) -> None:
    """Command line entry point."""
    parsed_args = _parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        if parsed_args.command == "import":
            _run_import(parsed_args)
        elif parsed_args.command == "importers":
            _run_list()
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except (PayloadError, ConfigurationError) as exc:
        log.error("%s", exc)  # noqa: TRY400
        sys.exit(2)
    except (FactImportError, HostNotFoundError) as exc:
        log.error("%s", exc)  # noqa: TRY400
        sys.exit(1)
    except Exception:
        log.exception("Fatal error during fact import")
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
