from mtender_docs.documents.exceptions import UnsupportedDocumentTypeError
from mtender_docs.documents.models import DocumentFormat
from mtender_docs.extraction.base import BaseTextExtractor

PDF_MEDIA_TYPE = "application/pdf"
LEGACY_WORD_MARKER = "msword"
OPENXML_MARKER = "openxmlformats-officedocument"


def media_type(content_type: str | None) -> str:
    """Strip parameters such as ``; charset=...`` and lower-case."""
    return (content_type or "").split(";", 1)[0].strip().lower()


def classify_content_type(content_type: str | None) -> DocumentFormat:
    media = media_type(content_type)
    if media == PDF_MEDIA_TYPE:
        return DocumentFormat.PDF
    if LEGACY_WORD_MARKER in media:
        return DocumentFormat.LEGACY_WORD
    if OPENXML_MARKER in media:
        return DocumentFormat.OPENXML_WORD
    return DocumentFormat.UNSUPPORTED


class FormatDispatcher:
    """Selects exactly one extraction strategy per content type."""

    def __init__(
        self,
        pdf_extractor: BaseTextExtractor,
        word_extractor: BaseTextExtractor,
    ) -> None:
        self._extractors: dict[DocumentFormat, BaseTextExtractor] = {
            DocumentFormat.PDF: pdf_extractor,
            DocumentFormat.LEGACY_WORD: word_extractor,
            DocumentFormat.OPENXML_WORD: word_extractor,
        }

    def select(self, content_type: str | None) -> tuple[DocumentFormat, BaseTextExtractor]:
        """Return the resolved format and its extractor.

        Raises:
            UnsupportedDocumentTypeError: for any other content type.
        """
        document_format = classify_content_type(content_type)
        extractor = self._extractors.get(document_format)
        if extractor is None:
            raise UnsupportedDocumentTypeError(content_type or "")
        return document_format, extractor
