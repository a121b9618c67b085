"""
identifier.py -- Turn loosely formatted CVE identifiers into record URLs.

Accepted shapes:
  CVE-2019-5007   full identifier (prefix is case-insensitive)
  2019-5007       year and sequence, prefix defaults to CVE
  5007            sequence only, year defaults to the current year

Short sequences are zero-padded to four digits, so "cve-2019-07" resolves to
CVE-2019-0007. The identifier "-" is passed through untouched and tells the
fetcher to read the record from standard input.
"""

import re
from dataclasses import dataclass
from datetime import date
from typing import Optional

from .errors import InvalidIdentifier, InvalidPrefix, InvalidSequenceID, InvalidYear

# cvelistV5 shards records into directories of 1000 by sequence number:
# cves/<year>/<sequence minus last 3 digits>xxx/CVE-<year>-<sequence>.json
DEFAULT_BASE_URL = "https://raw.githubusercontent.com/CVEProject/cvelistV5/main/cves"

STDIN_MARKER = "-"

CVE_PREFIX = "CVE"
_YEAR_RE = re.compile(r"^[0-9]{4}$")
_SEQUENCE_RE = re.compile(r"^[0-9]{4,}$")
_MIN_SEQUENCE_LEN = 4


@dataclass(frozen=True)
class CveId:
    prefix: str
    year: str
    sequence: str

    def __str__(self) -> str:
        return f"{self.prefix}-{self.year}-{self.sequence}"


def parse_identifier(raw: str, today: Optional[date] = None) -> CveId:
    """Parse raw into a validated CveId.

    Args:
        raw:   Identifier as typed by the user, already stripped.
        today: Date used for the default year. Defaults to date.today().

    Raises:
        InvalidIdentifier: empty input or more than three parts.
        InvalidPrefix:     prefix is not CVE (checked first).
        InvalidYear:       year is not exactly four digits.
        InvalidSequenceID: sequence is not four or more digits.
    """
    parts = raw.split("-") if raw else []
    prefix = CVE_PREFIX

    if len(parts) == 1:
        year = str((today or date.today()).year)
        sequence = parts[0]
    elif len(parts) == 2:
        year, sequence = parts
    elif len(parts) == 3:
        prefix, year, sequence = parts
        prefix = prefix.upper()
    else:
        raise InvalidIdentifier(raw)

    sequence = sequence.rjust(_MIN_SEQUENCE_LEN, "0")

    if prefix != CVE_PREFIX:
        raise InvalidPrefix(raw)
    if not _YEAR_RE.match(year):
        raise InvalidYear(raw)
    if not _SEQUENCE_RE.match(sequence):
        raise InvalidSequenceID(raw)

    return CveId(prefix=prefix, year=year, sequence=sequence)


def build_url(cve_id: CveId, base_url: str = DEFAULT_BASE_URL) -> str:
    """Return the raw record URL for cve_id. Pure string construction."""
    bucket = cve_id.sequence[:-3] + "xxx"
    return f"{base_url.rstrip('/')}/{cve_id.year}/{bucket}/{cve_id}.json"


def resolve_location(identifier: str, base_url: str = DEFAULT_BASE_URL) -> str:
    """Map an identifier to the location the fetcher should read.

    Returns STDIN_MARKER unchanged for "-"; otherwise parses the identifier
    and builds its URL. Parse failures propagate to the caller.
    """
    if identifier == STDIN_MARKER:
        return STDIN_MARKER
    return build_url(parse_identifier(identifier), base_url)
