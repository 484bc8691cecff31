"""Command line interface for PyInvoice."""

import argparse
import json

from .config import load_settings
from .core import convert_to_excel, extract_records, log_level_from_name, setup_logging
from .errors import DocumentReadError
from .record import record_to_json


def extract_command(args: argparse.Namespace) -> None:
    """Print the records of the given PDFs as JSON."""
    records = extract_records(args.files, args.settings)
    print(json.dumps([record_to_json(r) for r in records], indent=2, ensure_ascii=False))


def convert_command(args: argparse.Namespace) -> None:
    settings = dict(args.settings)
    if args.workers is not None:
        settings["workers"] = args.workers
    output = args.output or settings["output_file"]
    records = convert_to_excel(args.files, output, settings)
    print(f"Wrote {len(records)} invoices to {output}")


def serve_command(args: argparse.Namespace) -> None:
    """Starts the Flask upload page."""
    from .webapp import app

    print(f"Starting PyInvoice on http://{args.host}:{args.port}")
    app.run(host=args.host, port=args.port)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pyinvoice")
    parser.add_argument("--config", help="Config file path (default: $PYINVOICE_CONFIG)")
    parser.add_argument(
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    sub = parser.add_subparsers(dest="command")

    sub_extract = sub.add_parser("extract", help="Print extracted fields as JSON")
    sub_extract.add_argument("files", nargs="+")
    sub_extract.set_defaults(func=extract_command)

    sub_convert = sub.add_parser("convert", help="Write an Excel workbook")
    sub_convert.add_argument("files", nargs="+")
    sub_convert.add_argument("-o", "--output", help="Output .xlsx file")
    sub_convert.add_argument("--workers", type=int, help="Parallel text extraction")
    sub_convert.set_defaults(func=convert_command)

    sub_serve = sub.add_parser("serve", help="Run the upload web page")
    sub_serve.add_argument("--host", default="127.0.0.1")
    sub_serve.add_argument("--port", type=int, default=5000)
    sub_serve.set_defaults(func=serve_command)
    return parser


def main(argv=None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return

    args.settings = load_settings(args.config)
    level = args.log_level or args.settings["log_level"]
    setup_logging(args.settings["log_file"], log_level=log_level_from_name(level))
    try:
        args.func(args)
    except DocumentReadError as exc:
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
