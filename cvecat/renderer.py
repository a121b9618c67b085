"""
renderer.py -- Render a CveRecord through a user-supplied Jinja2 template.

Template variables:
  cve            the decoded CveRecord
  cve_metadata   shortcut for cve.cve_metadata (likewise containers,
                 data_type, data_version)
  url            location the record was read from ("-" for stdin)
  version        cvecat version

Helpers, available as functions and (regsub, mdescape) as filters:
  regsub(text, pattern, replacement)   re.sub over every match; groups in
                                       the replacement are \\1 or \\g<name>,
                                       not $1
  join(items, sep)                     sep.join(items)
  mdescape(text)                       backslash-escape Markdown specials

Referencing a field that does not exist is an error (StrictUndefined), not
an empty string.
"""

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Iterable

import jinja2

from .errors import TemplateCompileError, TemplateExecError
from .models import CveRecord

logger = logging.getLogger("cvecat.renderer")

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

# Backslash is in the set, and each input character is looked at exactly once,
# so escapes inserted here are never escaped again within one call.
_MARKDOWN_SPECIAL = frozenset("\\*_#`[]()>+-.!|~")


def regsub(text: str, pattern: str, replacement: str) -> str:
    """Replace every non-overlapping match of pattern in text.

    Uses Python re.sub syntax: refer to groups as \\1 or \\g<name>. A $1 in
    the replacement is copied through literally.

    An invalid pattern is logged and text is returned unchanged so that one
    bad expression does not abort the whole render.
    """
    try:
        return re.sub(pattern, replacement, text)
    except re.error as e:
        logger.warning("regsub: %r: %s", pattern, e)
        return text


def join(items: Iterable[str], sep: str) -> str:
    return sep.join(items)


def mdescape(text: str) -> str:
    """Escape Markdown metacharacters with a backslash.

    Not idempotent: mdescape(mdescape("*")) == "\\\\\\*".
    """
    return "".join("\\" + c if c in _MARKDOWN_SPECIAL else c for c in text)


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------


def _make_env() -> jinja2.Environment:
    env = jinja2.Environment(
        undefined=jinja2.StrictUndefined,
        autoescape=False,
        keep_trailing_newline=True,
    )
    env.globals.update(regsub=regsub, join=join, mdescape=mdescape)
    env.filters.update(regsub=regsub, mdescape=mdescape)
    return env


_env = _make_env()


@dataclass(frozen=True)
class RenderContext:
    record: CveRecord
    url: str
    version: str

    def variables(self) -> dict[str, Any]:
        names = {name: getattr(self.record, name) for name in CveRecord.model_fields}
        return {**names, "cve": self.record, "url": self.url, "version": self.version}


@lru_cache(maxsize=8)
def compile_template(source: str) -> jinja2.Template:
    """Compile source into a template. Raises TemplateCompileError."""
    try:
        return _env.from_string(source)
    except jinja2.TemplateSyntaxError as e:
        raise TemplateCompileError(f"line {e.lineno}: {e.message}") from e


def render(template: jinja2.Template, context: RenderContext) -> str:
    """Render template against context.

    Raises TemplateExecError on failure; its `partial` attribute holds the
    output produced before the failing expression.
    """
    chunks: list[str] = []
    try:
        for chunk in template.generate(**context.variables()):
            chunks.append(chunk)
    except jinja2.TemplateError as e:
        raise TemplateExecError(str(e), "".join(chunks)) from e
    except Exception as e:
        # Errors raised by template expressions or helpers, e.g. 1 // 0.
        raise TemplateExecError(f"{type(e).__name__}: {e}", "".join(chunks)) from e
    return "".join(chunks)
