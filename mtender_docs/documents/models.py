from dataclasses import dataclass, field
from enum import Enum


class DocumentFormat(str, Enum):
    """Extraction family resolved from a response content type."""

    PDF = "pdf"
    LEGACY_WORD = "legacy_word"
    OPENXML_WORD = "openxml_word"
    UNSUPPORTED = "unsupported"


class ErrorKind(str, Enum):
    """Category of a pipeline failure, stable across releases."""

    INVALID_INPUT = "invalid_input"
    TRANSPORT_FAILURE = "transport_failure"
    UPSTREAM_ERROR = "upstream_error"
    UNSUPPORTED_FORMAT = "unsupported_format"
    EXTRACTION_FAILURE = "extraction_failure"
    INTERNAL_ERROR = "internal_error"


@dataclass(frozen=True)
class DocumentRequest:
    """A request to fetch one document from the store."""

    document_url: str


@dataclass(frozen=True)
class FetchMetadata:
    """Document information available once response headers arrive."""

    content_type: str
    content_disposition: str | None = None
    filename: str | None = None


@dataclass(frozen=True)
class DocumentMetadata:
    source: str
    content_type: str
    filename: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        return {
            "filename": self.filename,
            "contentType": self.content_type,
            "source": self.source,
        }


@dataclass(frozen=True)
class DocumentResult:
    """Normalized document text returned to the caller."""

    text: str
    metadata: DocumentMetadata


@dataclass(frozen=True)
class DocumentFailure:
    """Structured error value produced at the pipeline boundary."""

    kind: ErrorKind
    message: str
    details: dict[str, object] = field(default_factory=dict)
