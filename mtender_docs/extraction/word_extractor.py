from mtender_docs.documents.exceptions import DocumentExtractionError
from mtender_docs.extraction.base import BaseTextExtractor
from mtender_docs.extraction.docx_adapter import DocxAdapter
from mtender_docs.extraction.legacy_doc_adapter import LegacyDocAdapter

ZIP_MAGIC = b"PK\x03\x04"
OLE_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"


class WordExtractor(BaseTextExtractor):
    """Handles both Word container formats behind one call.

    Servers label ``.doc`` and ``.docx`` files inconsistently, so the container
    is recognized from its leading bytes rather than the declared type.
    """

    def __init__(
        self,
        docx_extractor: BaseTextExtractor | None = None,
        legacy_extractor: BaseTextExtractor | None = None,
    ) -> None:
        self._docx_extractor = docx_extractor or DocxAdapter()
        self._legacy_extractor = legacy_extractor or LegacyDocAdapter()

    def extract(self, data: bytes) -> str:
        if data.startswith(ZIP_MAGIC):
            return self._docx_extractor.extract(data)
        if data.startswith(OLE_MAGIC):
            return self._legacy_extractor.extract(data)
        raise DocumentExtractionError("Data is neither an Office Open XML nor an OLE2 Word document")
