import pymupdf

from mtender_docs.documents.exceptions import DocumentExtractionError
from mtender_docs.extraction.base import BaseTextExtractor


class PyMuPdfAdapter(BaseTextExtractor):
    """Reads the PDF text layer with PyMuPDF."""

    def extract(self, data: bytes) -> str:
        try:
            with pymupdf.open(stream=data, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                if doc.needs_pass:
                    raise DocumentExtractionError("PDF is password protected")
                pages = [page.get_text() for page in doc]
        except DocumentExtractionError:
            raise
        except Exception as exc:
            raise DocumentExtractionError(f"pymupdf extraction failed: {exc}") from exc
        return "\n\n".join(pages)
