from mtender_docs.config.settings import Settings
from mtender_docs.extraction.base import BaseTextExtractor
from mtender_docs.extraction.pdfplumber_adapter import PdfPlumberAdapter
from mtender_docs.extraction.pymupdf_adapter import PyMuPdfAdapter
from mtender_docs.extraction.word_extractor import WordExtractor


class ExtractorFactory:
    """Creates the extraction strategies based on settings."""

    PDF_ADAPTERS: dict[str, type[BaseTextExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create_pdf_extractor(cls, settings: Settings) -> BaseTextExtractor:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.PDF_ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.PDF_ADAPTERS)}"
            )
        return adapter_cls()

    @classmethod
    def create_word_extractor(cls) -> BaseTextExtractor:
        return WordExtractor()
