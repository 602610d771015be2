import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

from mtender_docs.documents.collector import collect_bytes
from mtender_docs.documents.dispatcher import FormatDispatcher
from mtender_docs.documents.exceptions import DocumentExtractionError
from mtender_docs.documents.fetcher import DocumentFetcher
from mtender_docs.documents.models import DocumentFormat, FetchMetadata
from mtender_docs.documents.text_normalizer import normalize_text
from mtender_docs.documents.url_validator import DocumentUrlValidator
from mtender_docs.extraction.base import BaseTextExtractor


@dataclass(slots=True)
class PipelineContext:
    document_url: str
    metadata: FetchMetadata | None = None
    document_format: DocumentFormat | None = None
    extractor: BaseTextExtractor | None = None
    raw_bytes: bytes = b""
    extracted_text: str = ""
    normalized_text: str = ""


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError


class ValidateUrlStep(PipelineStep):
    def __init__(self, validator: DocumentUrlValidator) -> None:
        self._validator = validator

    def run(self, context: PipelineContext) -> PipelineContext:
        self._validator.validate(context.document_url)
        return context


class DownloadStep(PipelineStep):
    """Fetch, peek at headers, pick the extractor, then drain the body.

    The extractor is chosen before the body is read so unsupported documents
    are never downloaded.
    """

    def __init__(
        self,
        fetcher: DocumentFetcher,
        dispatcher: FormatDispatcher,
        deadline_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._fetcher = fetcher
        self._dispatcher = dispatcher
        self._deadline_seconds = deadline_seconds
        self._clock = clock

    def run(self, context: PipelineContext) -> PipelineContext:
        deadline = None
        if self._deadline_seconds:
            deadline = self._clock() + self._deadline_seconds
        with self._fetcher.open(context.document_url) as stream:
            context.metadata = stream.metadata
            context.document_format, context.extractor = self._dispatcher.select(
                stream.metadata.content_type
            )
            context.raw_bytes = collect_bytes(stream.chunks, deadline=deadline, clock=self._clock)
        return context


class ExtractTextStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        if context.extractor is None:
            raise ValueError("PipelineContext.extractor must be set before extraction")
        raw_bytes, context.raw_bytes = context.raw_bytes, b""
        if not raw_bytes:
            raise DocumentExtractionError("Document body is empty")
        context.extracted_text = context.extractor.extract(raw_bytes)
        return context


class NormalizeTextStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        context.normalized_text = normalize_text(context.extracted_text)
        context.extracted_text = ""
        return context
