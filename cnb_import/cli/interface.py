"""CLI entrypoint for cnb-import.

Здесь только разбор аргументов и вывод. Вся логика в importer.
"""

from __future__ import annotations

import argparse
import sys

from prettytable import PrettyTable

from ..core.exceptions import RateImportError
from ..core.models import MessageKind, RateTable
from ..core.utils import format_rate, normalize_code
from ..importer.config import RATES_URL, SCOPE_STORE, load_scope_config
from ..importer.importer import CzechCentralBankImporter
from ..importer.storage import JsonRateStore
from ..logging_config import configure_logging


def _print_error(msg: str) -> None:
    """Print a user-facing error message (no stack traces)."""
    print(msg, file=sys.stderr)


def _print_rates(rates: RateTable, currency: str | None = None) -> int:
    """Render base/target/rate table. Returns number of rows printed."""
    table = PrettyTable()
    table.field_names = ["Base", "Currency", "Rate"]
    table.align["Base"] = "l"
    table.align["Currency"] = "l"
    table.align["Rate"] = "r"
    wanted = normalize_code(currency) if currency else None
    count = 0
    for base in sorted(rates):
        for code in sorted(rates[base]):
            if wanted and code != wanted:
                continue
            table.add_row([base, code, format_rate(rates[base][code])])
            count += 1
    if count:
        print(table)
    return count


def _build_importer(url: str | None) -> CzechCentralBankImporter:
    scope_config = load_scope_config()
    if url:
        scope_config = scope_config.with_value(RATES_URL, url, SCOPE_STORE)
    return CzechCentralBankImporter.from_settings(scope_config)


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argparse parser with all subcommands."""
    parser = argparse.ArgumentParser(prog="cnb-import")
    sub = parser.add_subparsers(dest="command", required=True)

    # import-rates
    p = sub.add_parser("import-rates", help="Import CNB rates into the currency table")
    p.add_argument("--url", help="Override the configured feed URL")

    # fetch-rates
    p = sub.add_parser("fetch-rates", help="Fetch and print CNB rates without saving")
    p.add_argument("--url", help="Override the configured feed URL")

    # show-rates
    p = sub.add_parser("show-rates", help="Show rates stored in the currency table")
    p.add_argument("--currency", help="Filter by currency code (e.g. EUR)")

    # schedule
    p = sub.add_parser("schedule", help="Import rates periodically")
    p.add_argument(
        "--interval",
        type=float,
        default=86400.0,
        help="Seconds between imports (default 86400)",
    )
    p.add_argument("--url", help="Override the configured feed URL")

    return parser


def _run(argv: list[str]) -> int:
    """Execute a single CLI command and return process exit code."""
    parser = build_parser()
    ns = parser.parse_args(argv)
    try:
        if ns.command == "import-rates":
            importer = _build_importer(ns.url).import_rates()
            for entry in importer.get_log():
                if entry.kind is MessageKind.ERROR:
                    _print_error(entry.text)
                else:
                    print(entry.text)
            saved = any(e.kind is MessageKind.SUCCESS for e in importer.get_log())
            return 0 if saved else 1

        if ns.command == "fetch-rates":
            importer = _build_importer(ns.url)
            rates = importer.fetch_rates()
            for text in importer.get_messages():
                _print_error(text)
            if not _print_rates(rates):
                print("No currency rates fetched.")
                return 1
            return 0

        if ns.command == "show-rates":
            rates = JsonRateStore.from_config().read_rates()
            if not _print_rates(rates, ns.currency):
                print("Currency table is empty. Run 'import-rates'.")
                return 1
            return 0

        if ns.command == "schedule":
            from ..importer.scheduler import run_periodic

            run_periodic(float(ns.interval), _build_importer(ns.url))
            return 0

        parser.print_help()
        return 2
    except RateImportError as exc:
        _print_error(str(exc))
        return 1


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint used by the console script and main.py.

    Args:
        argv: Optional explicit argv (without program name). If None, uses sys.argv[1:].
    Returns:
        Exit code integer (0 success, non-zero on error).
    """
    configure_logging()
    args = sys.argv[1:] if argv is None else argv
    return _run(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
