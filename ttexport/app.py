import argparse
import sys
from datetime import date
from pathlib import Path
from typing import List, Tuple

from . import __version__
from .config import ExportConfig, has_usable_api_key
from .csv_export import rows_to_csv
from .env import load_env
from .errors import ExportError
from .logger import get_logger
from .models import CsvRow
from .pagination import fetch_all_candidates

MISSING_KEY_MESSAGE = "Missing API key. Set TEAMTAILOR_API_KEY in .env or pass --api-key."


def default_filename(today: date) -> str:
    return f"teamtailor-candidates-{today.isoformat()}.csv"


def export_csv(config: ExportConfig) -> Tuple[List[CsvRow], str]:
    """Run one full export and return the rows and the CSV document."""
    logger = get_logger()
    logger.info("[Export] Fetching candidates...")
    rows = fetch_all_candidates(config)
    logger.info(f"[Export] Got {len(rows)} rows. Generating CSV...")
    return rows, rows_to_csv(rows)


def write_document(path: Path, document: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    # newline="" keeps LF line endings on every platform
    with path.open("w", encoding="utf-8", newline="") as f:
        f.write(document)


def cmd_export(args: argparse.Namespace) -> None:
    logger = get_logger(level=args.log_level, log_dir=Path(args.log_dir) if args.log_dir else None)
    try:
        config = ExportConfig.from_env(
            api_key=args.api_key,
            base_url=args.base_url,
            max_pages=args.max_pages,
        )
    except ValueError as e:
        raise SystemExit(str(e))
    if not has_usable_api_key(config.api_key):
        raise SystemExit(MISSING_KEY_MESSAGE)

    try:
        rows, document = export_csv(config)
    except ExportError as e:
        logger.record_failure(type(e).__name__)
        logger.error(f"[Export] Error: {e}")
        logger.log_metrics_summary()
        raise SystemExit(str(e))

    if args.stdout:
        sys.stdout.write(document)
        sys.stdout.flush()
    else:
        output = Path(args.output) if args.output else Path(default_filename(date.today()))
        write_document(output, document)
        logger.info(f"[Export] CSV written: {output}")
        print(f"Done. rows={len(rows)} file={output}")
    logger.log_metrics_summary()


def main(argv=None):
    # Load .env if present (TEAMTAILOR_API_KEY, TEAMTAILOR_BASE_URL, etc.)
    load_env()
    parser = argparse.ArgumentParser(prog="ttexport", description="Export Teamtailor candidates to CSV")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")
    exp = subparsers.add_parser("export", help="Fetch all candidates with their job applications and write CSV")
    exp.add_argument("--api-key", help="Teamtailor API key (or set TEAMTAILOR_API_KEY)")
    exp.add_argument("--base-url", help="API root (default: https://api.teamtailor.com/v1)")
    exp.add_argument("--max-pages", type=int, help="Abort if the API still paginates after this many pages")
    out = exp.add_mutually_exclusive_group()
    out.add_argument("--output", help="CSV path (default: teamtailor-candidates-YYYY-MM-DD.csv)")
    out.add_argument("--stdout", action="store_true", help="Write the CSV to stdout instead of a file")
    exp.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Console log level")
    exp.add_argument("--log-dir", help="Directory for log files (default: logs/)")
    exp.set_defaults(func=cmd_export)

    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
