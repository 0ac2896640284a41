#!/usr/bin/env python3
"""
CLI for the ZIP Utility Lookup.

Usage:
    python run_lookup.py 44114
    python run_lookup.py --batch zips.csv --output results.csv
    python run_lookup.py --timeout 5 -v 19103
"""

import argparse
import csv
import json
import logging
import re
import sys

from zip_lookup.config import Config, load_dotenv
from zip_lookup.errors import ZipLookupError
from zip_lookup.resolver import ZipUtilityResolver
from zip_lookup.response import assemble, error_payload


def setup_logging(verbose: bool = False):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def single_lookup(resolver: ZipUtilityResolver, zip_code: str) -> int:
    """Look up a single ZIP and print the JSON payload. Returns the exit code."""
    try:
        result = resolver.lookup(zip_code)
    except ZipLookupError as e:
        print(json.dumps(error_payload(e.public_message), indent=2))
        return 1
    print(json.dumps(assemble(result), indent=2))
    return 0


_ZIP_COLUMNS = ("zip", "zip_code", "zipcode", "postal_code")


def read_zips(input_csv: str) -> list:
    """
    Read ZIPs from the `zip` column (or the first column) of a CSV.

    A file whose first row is already a ZIP has no header; that row is data.
    """
    with open(input_csv, "r", newline="") as f:
        rows = list(csv.reader(f))
    if not rows:
        return []

    header = [col.strip().lower() for col in rows[0]]
    zip_idx = next((i for i, col in enumerate(header) if col in _ZIP_COLUMNS), None)
    if zip_idx is not None:
        rows = rows[1:]
    else:
        zip_idx = 0
        if not re.fullmatch(r"[0-9]{5}", header[0] if header else ""):
            rows = rows[1:]

    zips = []
    for row in rows:
        value = row[zip_idx].strip() if len(row) > zip_idx else ""
        if value:
            zips.append(value)
    return zips


def batch_lookup(resolver: ZipUtilityResolver, input_csv: str, output_csv: str):
    """Batch lookup from CSV file."""
    zips = read_zips(input_csv)
    print(f"Loaded {len(zips)} ZIPs from {input_csv}")
    results = resolver.lookup_batch(zips)

    with open(output_csv, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([
            "zip", "city", "state", "electric", "gas", "matched_via", "error",
        ])
        for zip_code, r in zip(zips, results):
            if isinstance(r, ZipLookupError):
                writer.writerow([zip_code, "", "", "", "", "", r.public_message])
                continue
            writer.writerow([
                r.zip_code, r.city, r.state, r.electric, r.gas or "", r.matched_via, "",
            ])

    print(f"Wrote {len(results)} results to {output_csv}")


def main():
    parser = argparse.ArgumentParser(description="ZIP Utility Lookup")
    parser.add_argument("zip", nargs="?", help="5-digit ZIP code to look up")
    parser.add_argument("--batch", help="Input CSV file for batch processing")
    parser.add_argument("--output", default="results.csv", help="Output CSV for batch mode")
    parser.add_argument("--timeout", type=float, default=None, help="Geocode timeout (seconds)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")

    args = parser.parse_args()
    setup_logging(args.verbose)

    if not args.zip and not args.batch:
        parser.print_help()
        sys.exit(1)

    load_dotenv(Config().env_file)
    config = Config.from_env()
    if args.timeout is not None:
        config.geocode_timeout = args.timeout

    resolver = ZipUtilityResolver(config)

    if args.batch:
        batch_lookup(resolver, args.batch, args.output)
    else:
        sys.exit(single_lookup(resolver, args.zip))


if __name__ == "__main__":
    main()
