#!/usr/bin/env python3
"""
Command-Line Interface for the Agricultural Calendar Engine
"""

import argparse
import json
import logging
import os
import sys

from .config import ParserOptions
from .result import ProcessingStatus
from .service import CalendarParsingService


def setup_logging(verbose: bool = False):
    """Sets up basic logging for the CLI tool."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s',
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Parse an agricultural calendar workbook into JSON.")
    parser.add_argument("workbook", help="Path to the .xlsx calendar workbook.")
    parser.add_argument(
        "--filename-hint",
        help="Original filename or title used as classification evidence (defaults to the workbook name)."
    )
    parser.add_argument(
        "--sheet",
        action="append",
        dest="sheets",
        metavar="NAME",
        help="Worksheet to parse; repeat for several. All worksheets are parsed by default."
    )
    parser.add_argument("-o", "--output", help="Write the JSON result to this file instead of stdout.")
    parser.add_argument("--header-scan-rows", type=int, default=10, help="Rows scanned for timeline headers.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable DEBUG logging.")
    return parser


def main(argv=None) -> int:
    """Main function to run the calendar parser from the command line."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    filename_hint = args.filename_hint or os.path.basename(args.workbook)
    logging.info(f"Parsing calendar workbook '{args.workbook}'")

    service = CalendarParsingService(ParserOptions(header_scan_rows=args.header_scan_rows))
    result = service.parse_workbook(args.workbook, filename_hint=filename_hint, sheet_names=args.sheets)

    payload = json.dumps(result.to_dict(), indent=2, ensure_ascii=False)
    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(payload)
        logging.info(f"Result written to: {os.path.abspath(args.output)}")
    else:
        print(payload)

    if result.status == ProcessingStatus.FAILED:
        logging.error("No worksheet could be parsed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
