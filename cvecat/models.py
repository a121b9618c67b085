"""
models.py -- CVE JSON 5 record shape and decoder.

Only the subset of the schema that templates commonly use is modelled.
Unknown fields are ignored and missing ones default to empty values, but a
field of the wrong type (or a malformed timestamp) fails the whole decode.
Validation is strict: "7.5" is not accepted where a number is expected.

Timestamps carrying an explicit offset (+02:00) are converted to UTC, so
2023-12-13T02:30:00+02:00 reads as 00:30 UTC rather than the 02:30 wall-clock
time written in the record.

Attribute names are snake_case; the camelCase JSON names are aliases, so a
template reads `cve.cve_metadata.date_published` for `cveMetadata.datePublished`.
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from .errors import DecodeError, NoDescriptionError

# ---------------------------------------------------------------------------
# Timestamp
# ---------------------------------------------------------------------------

# Encodings seen in cvelistV5:
#   2023-11-17T12:57:41.538666
#   2023-11-24T19:51:55.099Z
#   2010-05-24T00:00:00Z
#   2023-12-13T00:00:00+00:00
_TIMESTAMP_RE = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})"
    r"(?:\.\d+)?"
    r"(?P<zone>Z|[+-]\d{2}:\d{2})?$"
)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a record timestamp, truncated to whole seconds, as UTC.

    Values without a zone are taken to be UTC. An explicit offset is applied
    so the result is always expressed in UTC. None passes through.
    """
    if value is None or isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValueError(f"timestamp must be a string, not {type(value).__name__}")
    m = _TIMESTAMP_RE.match(value)
    if m is None:
        raise ValueError(f"unrecognized timestamp: {value!r}")

    ts = datetime.strptime(m.group("base"), "%Y-%m-%dT%H:%M:%S")
    zone = m.group("zone")
    if zone and zone != "Z":
        sign = 1 if zone[0] == "+" else -1
        hours, minutes = int(zone[1:3]), int(zone[4:6])
        ts -= sign * timedelta(hours=hours, minutes=minutes)
    return ts.replace(tzinfo=timezone.utc)


Timestamp = Annotated[Optional[datetime], BeforeValidator(parse_timestamp)]


# ---------------------------------------------------------------------------
# Record shape
# ---------------------------------------------------------------------------


class _Node(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        strict=True,
        extra="ignore",
    )


class CveMetadata(_Node):
    cve_id: str = ""
    assigner_org_id: str = ""
    state: str = ""
    assigner_short_name: str = ""
    date_reserved: Timestamp = None
    date_published: Timestamp = None
    date_updated: Timestamp = None


class ProviderMetadata(_Node):
    org_id: str = ""
    short_name: str = ""
    date_updated: Timestamp = None


class Description(_Node):
    lang: str = ""
    value: str = ""


class Version(_Node):
    version: str = ""
    less_than: str = ""
    less_than_or_equal: str = ""
    status: str = ""
    version_type: str = ""


class Affected(_Node):
    vendor: str = ""
    product: str = ""
    default_status: str = ""
    versions: list[Version] = Field(default_factory=list)


class Reference(_Node):
    url: str = ""


class CvssV30(_Node):
    version: str = ""
    attack_complexity: str = ""
    attack_vector: str = ""
    availability_impact: str = ""
    confidentiality_impact: str = ""
    integrity_impact: str = ""
    privileges_required: str = ""
    scope: str = ""
    user_interaction: str = ""
    vector_string: str = ""
    base_score: float = 0.0
    base_severity: str = ""


class Metric(_Node):
    cvss_v3_0: CvssV30 = Field(default_factory=CvssV30, alias="cvssV3_0")


class ProblemTypeDescription(_Node):
    type: str = ""
    lang: str = ""
    description: str = ""
    cwe_id: str = ""


class ProblemType(_Node):
    descriptions: list[ProblemTypeDescription] = Field(default_factory=list)


class Source(_Node):
    advisory: str = ""
    discovery: str = ""


class Cna(_Node):
    title: str = ""
    provider_metadata: ProviderMetadata = Field(default_factory=ProviderMetadata)
    descriptions: list[Description] = Field(default_factory=list)
    affected: list[Affected] = Field(default_factory=list)
    references: list[Reference] = Field(default_factory=list)
    metrics: list[Metric] = Field(default_factory=list)
    problem_types: list[ProblemType] = Field(default_factory=list)
    source: Source = Field(default_factory=Source)


class Containers(_Node):
    cna: Cna = Field(default_factory=Cna)


class CveRecord(_Node):
    data_type: str = ""
    data_version: str = ""
    cve_metadata: CveMetadata = Field(default_factory=CveMetadata)
    containers: Containers = Field(default_factory=Containers)


# ---------------------------------------------------------------------------
# Decoder
# ---------------------------------------------------------------------------


def decode_record(raw: bytes) -> CveRecord:
    """Decode raw JSON into a CveRecord.

    Raises DecodeError for invalid JSON or a structural mismatch, and
    NoDescriptionError when the record decodes but has no descriptions.
    """
    try:
        record = CveRecord.model_validate_json(raw)
    except ValidationError as e:
        raise DecodeError(str(e)) from e

    if not record.containers.cna.descriptions:
        raise NoDescriptionError(record.cve_metadata.cve_id)
    return record
