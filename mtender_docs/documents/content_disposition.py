"""Filename extraction from ``Content-Disposition`` headers.

Both encodings seen on the document store are handled:

* ``filename*=utf-8''report%20final.pdf`` (RFC 5987 extended value)
* ``filename="report.pdf"`` or ``filename=report.pdf``

The extended form wins when both are present. Its value is percent-decoded with
the declared charset.
"""

import codecs
import re
from urllib.parse import unquote

_EXTENDED_FILENAME = re.compile(
    r"filename\*\s*=\s*([\w!#$%&+^`{}~.-]*)'[^']*'([^;\s]+)",
    re.IGNORECASE,
)
_PLAIN_FILENAME = re.compile(
    r'(?<![\w*])filename\s*=\s*(?:"((?:[^"\\]|\\.)*)"|([^;\s]+))',
    re.IGNORECASE,
)
_QUOTED_PAIR = re.compile(r"\\(.)")


def parse_content_disposition_filename(header: str | None) -> str | None:
    """Return the suggested filename, or None when there is none."""
    if not header:
        return None

    extended = _EXTENDED_FILENAME.search(header)
    if extended is not None:
        filename = unquote(extended.group(2), encoding=_charset(extended.group(1)), errors="replace")
        if filename:
            return filename

    plain = _PLAIN_FILENAME.search(header)
    if plain is None:
        return None
    if plain.group(1) is not None:
        filename = _QUOTED_PAIR.sub(r"\1", plain.group(1))
    else:
        filename = plain.group(2).strip('"')
    return filename or None


def _charset(declared: str) -> str:
    if not declared:
        return "utf-8"
    try:
        return codecs.lookup(declared).name
    except LookupError:
        return "utf-8"
