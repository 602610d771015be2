from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass

import httpx

from mtender_docs.documents.content_disposition import parse_content_disposition_filename
from mtender_docs.documents.exceptions import DocumentTransportError, DocumentUpstreamError
from mtender_docs.documents.models import FetchMetadata
from mtender_docs.documents.url_validator import DEFAULT_STORE_URL

ERROR_BODY_EXCERPT_CHARS = 500

ClientFactory = Callable[[], httpx.Client]


@dataclass
class DocumentStream:
    """Live response: headers are known, the body has not been read yet."""

    status_code: int
    metadata: FetchMetadata
    chunks: Iterator[bytes]


def metadata_from_headers(headers: httpx.Headers) -> FetchMetadata:
    disposition = headers.get("content-disposition")
    return FetchMetadata(
        content_type=headers.get("content-type", ""),
        content_disposition=disposition,
        filename=parse_content_disposition_filename(disposition),
    )


def build_client_factory(
    timeout_seconds: float,
    user_agent: str,
) -> ClientFactory:
    """Return a factory producing one short-lived client per download."""

    def factory() -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(timeout_seconds),
            follow_redirects=True,
            headers={"User-Agent": user_agent},
        )

    return factory


class DocumentFetcher:
    """Streams a document from the store over HTTP GET.

    Every request, redirect hops included, must stay on the store origin.
    """

    def __init__(self, client_factory: ClientFactory, store_url: str = DEFAULT_STORE_URL) -> None:
        self._client_factory = client_factory
        self._store_origin = _origin(httpx.URL(store_url))

    @contextmanager
    def open(self, document_url: str) -> Iterator[DocumentStream]:
        """Open a streamed GET and yield as soon as headers arrive.

        httpx failures raised while the caller drains ``chunks`` inside the
        ``with`` block are translated as well.

        Raises:
            DocumentUpstreamError: if the store answers with status >= 400.
            DocumentTransportError: on timeout, on a redirect leaving the store,
                or any other request failure.
        """
        try:
            with self._client_factory() as client:
                hooks = client.event_hooks
                hooks["request"] = [*hooks.get("request", []), self._check_origin]
                client.event_hooks = hooks
                with client.stream("GET", document_url) as response:
                    if response.is_error:
                        response.read()
                        raise DocumentUpstreamError(
                            response.status_code,
                            response.text[:ERROR_BODY_EXCERPT_CHARS],
                        )
                    yield DocumentStream(
                        status_code=response.status_code,
                        metadata=metadata_from_headers(response.headers),
                        chunks=response.iter_bytes(),
                    )
        except httpx.TimeoutException as exc:
            raise DocumentTransportError(f"Timed out fetching document: {exc}") from exc
        except httpx.RequestError as exc:
            raise DocumentTransportError(f"Failed to fetch document: {exc}") from exc

    def _check_origin(self, request: httpx.Request) -> None:
        if _origin(request.url) != self._store_origin:
            raise DocumentTransportError(
                f"Refusing to fetch {request.url}: outside the document store"
            )


def _origin(url: httpx.URL) -> tuple[str, str, int | None]:
    port = url.port
    if port is None:
        port = {"http": 80, "https": 443}.get(url.scheme)
    return url.scheme, url.host, port
