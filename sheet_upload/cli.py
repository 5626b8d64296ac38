"""Command line entry point: run the API, send a file to it, or parse one locally."""
from __future__ import annotations
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

import uvicorn

from sheet_upload.client import UploadClient
from sheet_upload.core.config import settings
from sheet_upload.core.errors import SUCCESS_MESSAGE
from sheet_upload.core.logging import setup_logging
from sheet_upload.io.readers import SheetReader

logger = logging.getLogger(__name__)

def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sheet-upload",
        description="Upload Excel spreadsheets and get their first sheet back as JSON rows",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the API and upload form on port 8000
  sheet-upload serve --port 8000

  # Send a spreadsheet to a running server
  sheet-upload send planilha.xlsx --url http://localhost:8000

  # Parse a spreadsheet without a server
  sheet-upload parse planilha.xlsx
        """
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the upload API")
    serve.add_argument("--host", default=settings.HOST)
    serve.add_argument("--port", type=int, default=settings.PORT)

    send = sub.add_parser("send", help="Upload a spreadsheet to a running server")
    send.add_argument("input_file", help="Input XLS/XLSX file")
    send.add_argument("--url", default=f"http://localhost:{settings.PORT}", help="Server base URL")

    parse = sub.add_parser("parse", help="Parse a spreadsheet locally")
    parse.add_argument("input_file", help="Input XLS/XLSX file")
    parse.add_argument("--include-blank-cells", action="store_true",
                       default=settings.INCLUDE_BLANK_CELLS, help="Emit blank cells as null")

    return parser

def _print(obj: dict):
    print(json.dumps(obj, ensure_ascii=False, indent=2, default=str))

def run_send(args, parser: argparse.ArgumentParser) -> int:
    if not Path(args.input_file).is_file():
        parser.error(f"Input file not found: {args.input_file}")

    result = asyncio.run(UploadClient(args.url).upload(args.input_file))
    if not result.ok:
        _print({"error": result.message})
        return 1
    _print({"data": result.message, "resultado": result.rows})
    return 0

def run_parse(args, parser: argparse.ArgumentParser) -> int:
    input_path = Path(args.input_file)
    if not input_path.exists():
        parser.error(f"Input file not found: {input_path}")

    result = SheetReader(include_blank_cells=args.include_blank_cells).parse_first_sheet(input_path)
    if not result.ok:
        _print({"error": result.error.message})
        return 1
    _print({"data": SUCCESS_MESSAGE, "resultado": result.rows})
    return 0

def run_serve(args) -> int:
    uvicorn.run("sheet_upload.main:app", host=args.host, port=args.port, log_level=settings.LOG_LEVEL.lower())
    return 0

def main(argv: list[str] | None = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging("DEBUG" if args.verbose else settings.LOG_LEVEL)

    if args.command == "serve":
        return run_serve(args)
    if args.command == "send":
        return run_send(args, parser)
    return run_parse(args, parser)

if __name__ == "__main__":
    sys.exit(main())
