"""
cvecat/pipeline.py -- Per-identifier pipeline and the batch run loop.

  identifier -> parse -> URL -> fetch -> decode -> render -> stdout

Each identifier is an independent unit of work. Any CvecatError raised while
processing one is logged and the loop moves on to the next; a bad or missing
CVE never aborts the batch.

Verbosity is a threshold; each level adds to the ones below it:
  > 0  identifier parse failures
  > 1  resolved URL
  > 2  raw fetched bytes
  > 3  decoded record
"""

import logging
from dataclasses import dataclass
from typing import IO, Iterable, Iterator, Optional

from . import __version__
from .config import DEFAULT_FORMAT
from .errors import CvecatError, IdentifierError, TemplateExecError
from .fetcher import fetch
from .identifier import DEFAULT_BASE_URL, resolve_location
from .models import decode_record
from .renderer import RenderContext, compile_template, render

logger = logging.getLogger("cvecat.pipeline")


@dataclass(frozen=True)
class RunOptions:
    format: str = DEFAULT_FORMAT
    verbose: int = 0
    dryrun: bool = False
    base_url: str = DEFAULT_BASE_URL
    timeout: Optional[float] = None
    version: str = __version__


def process_identifier(identifier: str, options: RunOptions, stdin: Optional[IO] = None) -> str:
    """Fetch and render one identifier. Returns "" when there is nothing to print.

    Malformed identifiers are not errors at this level: they are logged when
    verbose > 0 and otherwise skipped quietly. Every other failure is raised
    as a CvecatError for the caller to report.
    """
    try:
        location = resolve_location(identifier, options.base_url)
    except IdentifierError as e:
        if options.verbose > 0:
            logger.error("%s: format is CVE-<YYYY>-<NNNN...>", e)
        return ""

    if options.verbose > 1:
        logger.info("%s", location)
    if options.dryrun:
        return ""

    body = fetch(location, stdin=stdin, timeout=options.timeout)
    if not body:
        return ""
    if options.verbose > 2:
        logger.info("%s", body.decode("utf-8", errors="replace"))

    record = decode_record(body)
    if options.verbose > 3:
        logger.info("%r", record)

    template = compile_template(options.format)
    return render(template, RenderContext(record=record, url=location, version=options.version))


def iter_identifiers(args: Iterable[str], stdin: Optional[IO] = None) -> Iterator[str]:
    """Yield stripped, non-blank identifiers.

    Arguments, when given, are joined and re-split on newlines so that an
    argument containing embedded newlines behaves like several lines.
    Otherwise stdin is read line by line.
    """
    args = list(args)
    if args:
        lines: Iterable[str] = "\n".join(args).splitlines()
    elif stdin is not None:
        lines = iter(stdin.readline, "")
    else:
        lines = []

    try:
        for line in lines:
            identifier = line.strip()
            if identifier:
                yield identifier
    except (OSError, UnicodeDecodeError) as e:
        # Nothing left to scan; report and let the batch finish.
        logger.error("reading identifiers: %s", e)


def run(identifiers: Iterable[str], options: RunOptions, out: IO, stdin: Optional[IO] = None) -> int:
    """Process every identifier, writing output as soon as it is rendered.

    Returns the number of identifiers that failed. Failures are logged and
    never stop the loop.
    """
    failed = 0
    for identifier in identifiers:
        try:
            text = process_identifier(identifier, options, stdin=stdin)
        except TemplateExecError as e:
            failed += 1
            if e.partial:
                logger.error("%s: %s (partial output: %r)", identifier, e, e.partial)
            else:
                logger.error("%s: %s", identifier, e)
            continue
        except CvecatError as e:
            failed += 1
            logger.error("%s: %s", identifier, e)
            continue

        if text:
            out.write(text)
            out.flush()
    return failed
