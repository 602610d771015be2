from typing import ClassVar

from mtender_docs.documents.models import DocumentFailure, ErrorKind


class DocumentError(Exception):
    """Base exception for all document pipeline errors."""

    kind: ClassVar[ErrorKind] = ErrorKind.INTERNAL_ERROR

    @property
    def details(self) -> dict[str, object]:
        return {}

    def to_failure(self) -> DocumentFailure:
        return DocumentFailure(kind=self.kind, message=str(self), details=self.details)


class InvalidDocumentUrlError(DocumentError):
    """Raised when a document URL does not point at the trusted store."""

    kind = ErrorKind.INVALID_INPUT


class DocumentTransportError(DocumentError):
    """Raised on timeouts, connection failures and exceeded download deadlines."""

    kind = ErrorKind.TRANSPORT_FAILURE


class DocumentUpstreamError(DocumentError):
    """Raised when the document store answers with an error status."""

    kind = ErrorKind.UPSTREAM_ERROR

    def __init__(self, status_code: int, body: str = "") -> None:
        message = f"Document store responded with HTTP {status_code}"
        if body:
            message = f"{message}: {body}"
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    @property
    def details(self) -> dict[str, object]:
        return {"status_code": self.status_code, "body": self.body}


class UnsupportedDocumentTypeError(DocumentError):
    """Raised when the content type has no extraction strategy."""

    kind = ErrorKind.UNSUPPORTED_FORMAT

    def __init__(self, content_type: str) -> None:
        super().__init__(f"Unsupported document type: {content_type}")
        self.content_type = content_type

    @property
    def details(self) -> dict[str, object]:
        return {"content_type": self.content_type}


class DocumentExtractionError(DocumentError):
    """Raised when a decoder cannot turn document bytes into text."""

    kind = ErrorKind.EXTRACTION_FAILURE
