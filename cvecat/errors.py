"""Exception types raised by the cvecat pipeline.

Every per-identifier failure derives from CvecatError so the run loop can
report it and move on to the next identifier.
"""

from typing import Optional


class CvecatError(Exception):
    """Base exception for all pipeline failures."""


# ---------------------------------------------------------------------------
# Identifier shape -- detected before any network access
# ---------------------------------------------------------------------------


class IdentifierError(CvecatError, ValueError):
    """Raised when an identifier cannot be turned into CVE-YYYY-NNNN."""

    reason = "invalid CVE"

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"{identifier}: {self.reason}")


class InvalidIdentifier(IdentifierError):
    reason = "invalid CVE"


class InvalidPrefix(IdentifierError):
    reason = "invalid CVE prefix"


class InvalidYear(IdentifierError):
    reason = "invalid CVE year"


class InvalidSequenceID(IdentifierError):
    reason = "invalid CVE identifier"


# ---------------------------------------------------------------------------
# Fetch
# ---------------------------------------------------------------------------


class TransportError(CvecatError):
    """DNS, connection or timeout failure talking to the remote host."""


class RemoteStatusError(CvecatError):
    """The remote host answered with a non-200 status.

    Args:
        status_code: HTTP status code of the response.
        body:        Stripped excerpt of the response body.
    """

    def __init__(self, status_code: int, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        msg = f"{status_code}"
        if body:
            msg += f": {body}"
        super().__init__(msg)


# ---------------------------------------------------------------------------
# Decode
# ---------------------------------------------------------------------------


class DecodeError(CvecatError):
    """The fetched document is not a structurally valid CVE record."""


class NoDescriptionError(CvecatError):
    """The record decoded but carries no description entry."""

    def __init__(self, cve_id: str = "") -> None:
        self.cve_id = cve_id
        super().__init__(f"{cve_id}: no description" if cve_id else "no description")


# ---------------------------------------------------------------------------
# Render
# ---------------------------------------------------------------------------


class TemplateError(CvecatError):
    """Base class for template failures."""


class TemplateCompileError(TemplateError):
    """The output template has a syntax error."""


class TemplateExecError(TemplateError):
    """Rendering stopped part way through.

    `partial` holds whatever the template produced before the failure.
    """

    def __init__(self, message: str, partial: Optional[str] = "") -> None:
        self.partial = partial or ""
        super().__init__(message)
