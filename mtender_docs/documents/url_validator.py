import re

from mtender_docs.documents.exceptions import InvalidDocumentUrlError

DEFAULT_STORE_URL = "https://storage.mtender.gov.md"


def document_url_pattern(store_url: str = DEFAULT_STORE_URL) -> re.Pattern[str]:
    """Pattern for `{store_url}/get/{name}-{digits}` with nothing trailing."""
    origin = re.escape(store_url.rstrip("/"))
    return re.compile(rf"{origin}/get/[\w-]+-\d+", re.ASCII)


class DocumentUrlValidator:
    """Checks that a URL belongs to the trusted document store."""

    def __init__(self, store_url: str = DEFAULT_STORE_URL) -> None:
        self._pattern = document_url_pattern(store_url)

    @property
    def pattern(self) -> str:
        return self._pattern.pattern

    def is_valid(self, document_url: object) -> bool:
        return isinstance(document_url, str) and self._pattern.fullmatch(document_url) is not None

    def validate(self, document_url: object) -> str:
        """Return the URL unchanged or raise InvalidDocumentUrlError."""
        if not self.is_valid(document_url):
            raise InvalidDocumentUrlError(f"Invalid MTender storage URL: {document_url!r}")
        return document_url  # type: ignore[return-value]
