import asyncio
import json
import time
import uuid
from collections.abc import Awaitable, Callable
from typing import Any

from mcp.types import TextContent, Tool

from mtender_docs.documents.models import (
    DocumentFailure,
    DocumentRequest,
    DocumentResult,
    ErrorKind,
)
from mtender_docs.documents.pipeline import DocumentPipeline
from mtender_docs.logging.logger import Log

FETCH_TENDER_DOCUMENT = "fetch_tender_document"
LOG_PREVIEW_CHARS = 500

ToolHandler = Callable[[dict[str, Any]], Awaitable[list[TextContent]]]


class ToolCallError(Exception):
    """Raised to make the MCP server answer with a tool-level error."""

    def __init__(self, failure: DocumentFailure) -> None:
        super().__init__(f"[{failure.kind.value}] {failure.message}")
        self.failure = failure


def fetch_tender_document_tool(url_pattern: str) -> Tool:
    return Tool(
        name=FETCH_TENDER_DOCUMENT,
        description="Fetch and extract text from tender documents for AI/LLM analysis",
        inputSchema={
            "type": "object",
            "properties": {
                "documentUrl": {
                    "type": "string",
                    "description": "MTender storage URL of the document",
                    "pattern": f"^{url_pattern}$",
                }
            },
            "required": ["documentUrl"],
        },
    )


def render_result(result: DocumentResult) -> list[TextContent]:
    """Document text first, then its metadata as a JSON object."""
    return [
        TextContent(type="text", text=result.text),
        TextContent(type="text", text=json.dumps(result.metadata.to_dict(), ensure_ascii=False)),
    ]


def parse_request(arguments: dict[str, Any]) -> DocumentRequest:
    document_url = arguments.get("documentUrl")
    if not isinstance(document_url, str) or not document_url:
        raise ToolCallError(
            DocumentFailure(kind=ErrorKind.INVALID_INPUT, message="documentUrl is required")
        )
    return DocumentRequest(document_url=document_url)


class FetchTenderDocumentHandler:
    """Runs the document pipeline for one tool call."""

    def __init__(self, pipeline: DocumentPipeline) -> None:
        self._pipeline = pipeline

    async def __call__(self, arguments: dict[str, Any]) -> list[TextContent]:
        request = parse_request(arguments)
        outcome = await asyncio.to_thread(self._pipeline.process, request.document_url)
        if isinstance(outcome, DocumentFailure):
            raise ToolCallError(outcome)
        Log.debug(
            f"Extracted {len(outcome.text)} chars from {outcome.metadata.content_type} "
            f"document {outcome.metadata.filename or '<unnamed>'}"
        )
        return render_result(outcome)


def logged_tool_call(name: str, handler: ToolHandler) -> ToolHandler:
    """Wrap a tool handler with request id, timing and size logging."""

    async def wrapper(arguments: dict[str, Any]) -> list[TextContent]:
        request_id = f"req-{uuid.uuid4().hex[:8]}"
        Log.info(f"[{request_id}] Handling {name}: {_preview(json.dumps(arguments, default=str))}")
        started = time.perf_counter()
        try:
            content = await handler(arguments)
        except ToolCallError as exc:
            duration_ms = (time.perf_counter() - started) * 1000
            Log.error(
                f"[{request_id}] {name} failed after {duration_ms:.0f} ms "
                f"({exc.failure.kind.value}): {exc.failure.message}"
            )
            raise
        except Exception:
            duration_ms = (time.perf_counter() - started) * 1000
            Log.exception(f"[{request_id}] {name} crashed after {duration_ms:.0f} ms")
            raise
        duration_ms = (time.perf_counter() - started) * 1000
        size = sum(len(block.text) for block in content)
        Log.info(f"[{request_id}] {name} succeeded in {duration_ms:.0f} ms, {size} chars")
        return content

    return wrapper


def _preview(text: str) -> str:
    if len(text) <= LOG_PREVIEW_CHARS:
        return text
    return text[:LOG_PREVIEW_CHARS] + "...[truncated]"
