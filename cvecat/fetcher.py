"""
fetcher.py -- Retrieve raw CVE record bytes.

Records come from raw.githubusercontent.com, or from standard input when the
location is "-" (used to try out templates against a local file without
touching the network). One GET per record, no retry.
"""

import logging
import sys
from typing import IO, Optional, Union

import requests

from .errors import DecodeError, RemoteStatusError, TransportError
from .identifier import STDIN_MARKER

logger = logging.getLogger("cvecat.fetcher")

# Longest response body excerpt carried by RemoteStatusError.
_BODY_EXCERPT = 200

# Module-level session shared across all fetches for connection pooling.
_session = requests.Session()


def _read_stream(stream: IO) -> bytes:
    try:
        data: Union[str, bytes] = stream.read()
    except UnicodeDecodeError as e:
        raise DecodeError(f"stdin: not UTF-8: {e}") from e
    except OSError as e:
        raise TransportError(f"stdin: {e}") from e
    if isinstance(data, str):
        return data.encode("utf-8")
    return data


def fetch(location: str, stdin: Optional[IO] = None, timeout: Optional[float] = None) -> bytes:
    """Return the raw bytes stored at location.

    Args:
        location: Record URL, or "-" to read from stdin.
        stdin:    Stream to read for "-". Defaults to sys.stdin.
        timeout:  Seconds to wait for the server. None keeps the requests
                  default, which waits indefinitely.

    Raises:
        RemoteStatusError: the server answered with anything but 200.
        TransportError:    the request never got an answer, or stdin
                           could not be read.
        DecodeError:       stdin is not valid UTF-8.

    An empty body is returned as b"" and is not an error.
    """
    if location == STDIN_MARKER:
        return _read_stream(stdin if stdin is not None else sys.stdin)

    try:
        resp = _session.get(location, timeout=timeout)
    except requests.RequestException as e:
        raise TransportError(f"{location}: {e}") from e

    if resp.status_code != 200:
        excerpt = resp.text.strip()[:_BODY_EXCERPT]
        logger.debug("GET %s returned %d", location, resp.status_code)
        raise RemoteStatusError(resp.status_code, excerpt)

    return resp.content
