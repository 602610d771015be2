import time
from collections.abc import Callable, Iterable

from mtender_docs.documents.exceptions import DocumentTransportError


def collect_bytes(
    chunks: Iterable[bytes],
    *,
    deadline: float | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> bytes:
    """Drain a chunk stream into a single buffer.

    An exception raised by the stream propagates unchanged; partial data is
    discarded. No size cap is applied, so the whole document is held in memory.

    Args:
        chunks: Body chunks in arrival order.
        deadline: Absolute ``clock()`` value after which the drain is abandoned.
        clock: Monotonic time source used for the deadline.

    Raises:
        DocumentTransportError: if the deadline passes before the stream ends.
    """
    buffer = bytearray()
    for chunk in chunks:
        buffer.extend(chunk)
        if deadline is not None and clock() > deadline:
            raise DocumentTransportError(
                f"Document download exceeded its deadline after {len(buffer)} bytes"
            )
    return bytes(buffer)
