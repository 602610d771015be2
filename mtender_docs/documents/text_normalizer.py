import re

_EXCESS_NEWLINES = re.compile(r"\n{3,}")
# str.strip() does not treat U+FEFF as whitespace
_EDGE_WHITESPACE = re.compile(r"^[\s\ufeff]+|[\s\ufeff]+$")


def normalize_text(text: str) -> str:
    """Canonicalize whitespace for language-model consumption.

    CRLF becomes LF, blank-line runs are capped at one blank line and leading
    and trailing whitespace (byte order marks included) is removed. Nothing
    else is changed.
    """
    text = text.replace("\r\n", "\n")
    text = _EXCESS_NEWLINES.sub("\n\n", text)
    return _EDGE_WHITESPACE.sub("", text)
