"""Unit tests for cvecat/identifier.py -- pure logic, no I/O, no mocking needed."""

from datetime import date

import pytest

from cvecat.errors import IdentifierError, InvalidIdentifier, InvalidPrefix, InvalidSequenceID, InvalidYear
from cvecat.identifier import (
    DEFAULT_BASE_URL,
    STDIN_MARKER,
    CveId,
    build_url,
    parse_identifier,
    resolve_location,
)

# ---------------------------------------------------------------------------
# TestParseIdentifier
# ---------------------------------------------------------------------------


class TestParseIdentifier:
    def test_full_identifier(self):
        assert parse_identifier("CVE-2019-5007") == CveId("CVE", "2019", "5007")

    def test_lowercase_prefix_normalized_and_short_sequence_padded(self):
        assert parse_identifier("cve-2019-07") == CveId("CVE", "2019", "0007")

    def test_long_sequence_kept(self):
        assert parse_identifier("CVE-2021-44228").sequence == "44228"

    def test_two_parts_default_prefix(self):
        assert parse_identifier("2019-5007") == CveId("CVE", "2019", "5007")

    def test_one_part_defaults_to_current_year(self):
        cve_id = parse_identifier("5007")
        assert cve_id == CveId("CVE", str(date.today().year), "5007")

    def test_one_part_uses_injected_date(self):
        assert parse_identifier("12", today=date(2001, 6, 1)) == CveId("CVE", "2001", "0012")

    def test_str_is_canonical_form(self):
        assert str(parse_identifier("cve-2019-7")) == "CVE-2019-0007"

    def test_two_digit_year_is_invalid_year(self):
        with pytest.raises(InvalidYear):
            parse_identifier("CVE-19-5007")

    def test_wrong_prefix(self):
        with pytest.raises(InvalidPrefix):
            parse_identifier("XXX-2019-5007")

    def test_prefix_checked_before_year_and_sequence(self):
        with pytest.raises(InvalidPrefix):
            parse_identifier("XXX-19-abc")

    def test_year_checked_before_sequence(self):
        with pytest.raises(InvalidYear):
            parse_identifier("CVE-19-abc")

    def test_non_numeric_sequence(self):
        with pytest.raises(InvalidSequenceID):
            parse_identifier("CVE-2019-50a7")

    def test_short_non_numeric_sequence_is_padded_then_rejected(self):
        with pytest.raises(InvalidSequenceID):
            parse_identifier("abc")

    def test_too_many_parts(self):
        with pytest.raises(InvalidIdentifier):
            parse_identifier("CVE-2019-5007-1")

    def test_empty_string(self):
        with pytest.raises(InvalidIdentifier):
            parse_identifier("")

    def test_errors_are_value_errors(self):
        """Callers that only know about ValueError still catch parse failures."""
        with pytest.raises(ValueError):
            parse_identifier("XXX-2019-5007")

    def test_error_message_names_identifier(self):
        with pytest.raises(IdentifierError, match="CVE-19-5007: invalid CVE year"):
            parse_identifier("CVE-19-5007")


# ---------------------------------------------------------------------------
# TestBuildUrl
# ---------------------------------------------------------------------------


class TestBuildUrl:
    def test_bucket_strips_last_three_digits(self):
        url = build_url(CveId("CVE", "2019", "5007"))
        assert url == f"{DEFAULT_BASE_URL}/2019/5xxx/CVE-2019-5007.json"

    def test_padded_sequence_bucket(self):
        url = build_url(parse_identifier("cve-2019-07"))
        assert url.endswith("/2019/0xxx/CVE-2019-0007.json")

    def test_long_sequence_bucket(self):
        url = build_url(parse_identifier("CVE-2021-44228"))
        assert url.endswith("/2021/44xxx/CVE-2021-44228.json")

    @pytest.mark.parametrize(
        "sequence, bucket",
        [("1000", "1xxx"), ("0999", "0xxx"), ("123456", "123xxx"), ("1234567", "1234xxx")],
    )
    def test_bucket_for_sequence_lengths(self, sequence, bucket):
        url = build_url(CveId("CVE", "2024", sequence))
        assert f"/2024/{bucket}/CVE-2024-{sequence}.json" in url

    def test_custom_base_url_trailing_slash(self):
        url = build_url(CveId("CVE", "2019", "5007"), "https://mirror.example/cves/")
        assert url == "https://mirror.example/cves/2019/5xxx/CVE-2019-5007.json"


# ---------------------------------------------------------------------------
# TestResolveLocation
# ---------------------------------------------------------------------------


class TestResolveLocation:
    def test_stdin_marker_passes_through(self):
        assert resolve_location("-") == STDIN_MARKER

    def test_identifier_resolved_to_url(self):
        assert resolve_location("2019-5007") == f"{DEFAULT_BASE_URL}/2019/5xxx/CVE-2019-5007.json"

    def test_invalid_identifier_raises(self):
        with pytest.raises(InvalidPrefix):
            resolve_location("XXX-2019-5007")
