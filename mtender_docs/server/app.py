from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from mtender_docs.config.settings import Settings
from mtender_docs.documents.models import DocumentFailure, ErrorKind
from mtender_docs.documents.pipeline import DocumentPipeline
from mtender_docs.documents.url_validator import DocumentUrlValidator
from mtender_docs.logging.logger import Log
from mtender_docs.server.tools import (
    FETCH_TENDER_DOCUMENT,
    FetchTenderDocumentHandler,
    ToolCallError,
    ToolHandler,
    fetch_tender_document_tool,
    logged_tool_call,
)


def create_server(settings: Settings, pipeline: DocumentPipeline) -> Server:
    """Build the MCP server exposing the document tools."""
    server: Server = Server(settings.server_name)
    url_pattern = DocumentUrlValidator(settings.document_store_url).pattern
    tools: list[Tool] = [fetch_tender_document_tool(url_pattern)]
    handlers: dict[str, ToolHandler] = {
        FETCH_TENDER_DOCUMENT: logged_tool_call(
            FETCH_TENDER_DOCUMENT, FetchTenderDocumentHandler(pipeline)
        ),
    }

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return tools

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[TextContent]:
        handler = handlers.get(name)
        if handler is None:
            raise ToolCallError(
                DocumentFailure(kind=ErrorKind.INVALID_INPUT, message=f"Unknown tool: {name}")
            )
        return await handler(arguments or {})

    return server


async def serve_stdio(server: Server) -> None:
    """Run the MCP server over stdin/stdout until the client disconnects."""
    Log.info(f"Starting {server.name} MCP server on stdio")
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
    Log.info(f"{server.name} MCP server stopped")
