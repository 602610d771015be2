import io

import pdfplumber

from mtender_docs.documents.exceptions import DocumentExtractionError
from mtender_docs.extraction.base import BaseTextExtractor


class PdfPlumberAdapter(BaseTextExtractor):
    """Reads the PDF text layer with pdfplumber."""

    def extract(self, data: bytes) -> str:
        try:
            with pdfplumber.open(io.BytesIO(data)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
        except Exception as exc:
            raise DocumentExtractionError(f"pdfplumber extraction failed: {exc}") from exc
        return "\n\n".join(pages)
