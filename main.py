#!/usr/bin/env python3
"""
cvecat -- Print CVE records from the CVEProject cvelistV5 repository.

Identifiers are taken from the command line, or one per line from stdin when
none are given. Each record is rendered through a Jinja2 template.

Usage:
  python main.py CVE-2021-44228
  python main.py 2019-5007 cve-2019-07 12345
  cat ids.txt | python main.py
  python main.py --format '{{ cve_metadata.cve_id }} {{ cve_metadata.date_published }}' CVE-2023-44487
  python main.py - < CVE-2021-44228.json
  python main.py --dryrun --verbose 2 CVE-2021-44228

Environment variables:
  CVECAT_FORMAT    Default output template (overridden by --format).
  CVECAT_BASE_URL  Root of a cvelistV5 mirror.
  CVECAT_TIMEOUT   HTTP timeout in seconds (default: none).
"""

import argparse
import logging
import sys
from typing import Optional

from cvecat import __version__
from cvecat.config import get_settings
from cvecat.pipeline import RunOptions, iter_identifiers, run


def _build_parser(default_format: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cvecat",
        description="Fetch CVE records and render them through a template.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Template variables:
  cve, cve_metadata, containers, url, version

Template helpers:
  regsub(text, pattern, replacement), join(items, sep), mdescape(text)
  regsub uses Python re syntax: groups are \\1 or \\g<name> in the
  replacement, not $1.

Examples:
  python main.py CVE-2021-44228
  python main.py --format '{{ containers.cna.title | mdescape }}\\n' CVE-2021-44228
  python main.py - < record.json
        """,
    )
    parser.add_argument(
        "cves",
        nargs="*",
        metavar="CVE-ID",
        help="CVE IDs to look up (CVE-YYYY-NNNN, YYYY-NNNN or NNNN); '-' reads a record from stdin",
    )
    parser.add_argument(
        "--dryrun",
        action="store_true",
        help="Parse identifiers and resolve URLs without downloading",
    )
    parser.add_argument(
        "--format",
        default=default_format,
        metavar="TEMPLATE",
        help="Output template (default: $CVECAT_FORMAT or the built-in one-line summary)",
    )
    parser.add_argument(
        "--verbose",
        type=int,
        default=0,
        metavar="N",
        help="Debug output: 1 bad IDs, 2 URLs, 3 raw JSON, 4 decoded record",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    settings = get_settings()
    args = _build_parser(settings.format).parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(name)s: %(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    options = RunOptions(
        format=args.format,
        verbose=args.verbose,
        dryrun=args.dryrun,
        base_url=settings.base_url,
        timeout=settings.timeout,
    )

    run(iter_identifiers(args.cves, sys.stdin), options, sys.stdout, stdin=sys.stdin)
    return 0


if __name__ == "__main__":
    sys.exit(main())
