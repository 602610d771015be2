import time
from collections.abc import Callable, Sequence

from mtender_docs.config.settings import Settings
from mtender_docs.documents.dispatcher import FormatDispatcher
from mtender_docs.documents.exceptions import DocumentError
from mtender_docs.documents.fetcher import DocumentFetcher, build_client_factory
from mtender_docs.documents.models import (
    DocumentFailure,
    DocumentMetadata,
    DocumentResult,
    ErrorKind,
)
from mtender_docs.documents.steps import (
    DownloadStep,
    ExtractTextStep,
    NormalizeTextStep,
    PipelineContext,
    PipelineStep,
    ValidateUrlStep,
)
from mtender_docs.documents.url_validator import DocumentUrlValidator
from mtender_docs.extraction.factory import ExtractorFactory


class DocumentPipeline:
    """Runs the retrieval and extraction steps for one document URL.

    Pipeline: validate -> download -> extract -> normalize.
    Instances hold no per-request state and may serve concurrent calls.
    """

    def __init__(self, steps: Sequence[PipelineStep]) -> None:
        self._steps = list(steps)

    def run(self, document_url: str) -> DocumentResult:
        """Run every step and build the result.

        Raises:
            DocumentError: on the first failing step.
        """
        context = PipelineContext(document_url=document_url)
        for step in self._steps:
            context = step.run(context)
        return self._build_result(context)

    def process(self, document_url: str) -> DocumentResult | DocumentFailure:
        """Like run(), but every failure is returned as a DocumentFailure."""
        try:
            return self.run(document_url)
        except DocumentError as exc:
            return exc.to_failure()
        except Exception as exc:
            return DocumentFailure(
                kind=ErrorKind.INTERNAL_ERROR,
                message=f"Unexpected error processing document: {exc}",
                details={"exception": type(exc).__name__},
            )

    def _build_result(self, context: PipelineContext) -> DocumentResult:
        if context.metadata is None:
            raise ValueError("PipelineContext.metadata must be set before building a result")
        return DocumentResult(
            text=context.normalized_text,
            metadata=DocumentMetadata(
                source=context.document_url,
                content_type=context.metadata.content_type,
                filename=context.metadata.filename,
            ),
        )


def build_pipeline(
    settings: Settings,
    fetcher: DocumentFetcher | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> DocumentPipeline:
    """Build a DocumentPipeline with all required adapters."""
    if fetcher is None:
        fetcher = DocumentFetcher(
            build_client_factory(
                timeout_seconds=settings.document_fetch_timeout_seconds,
                user_agent=settings.http_user_agent,
            ),
            store_url=settings.document_store_url,
        )
    dispatcher = FormatDispatcher(
        pdf_extractor=ExtractorFactory.create_pdf_extractor(settings),
        word_extractor=ExtractorFactory.create_word_extractor(),
    )
    steps: list[PipelineStep] = [
        ValidateUrlStep(DocumentUrlValidator(settings.document_store_url)),
        DownloadStep(
            fetcher=fetcher,
            dispatcher=dispatcher,
            deadline_seconds=settings.document_download_deadline_seconds,
            clock=clock,
        ),
        ExtractTextStep(),
        NormalizeTextStep(),
    ]
    return DocumentPipeline(steps)
