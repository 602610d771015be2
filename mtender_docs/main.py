import asyncio

from mtender_docs.config.settings import Settings
from mtender_docs.documents.pipeline import build_pipeline
from mtender_docs.logging.logger import Log
from mtender_docs.server.app import create_server, serve_stdio


def main() -> None:
    """Entry point: load settings -> build pipeline -> serve MCP over stdio."""
    settings = Settings()
    Log.configure(settings.log_level)

    pipeline = build_pipeline(settings)
    server = create_server(settings, pipeline)
    try:
        asyncio.run(serve_stdio(server))
    except KeyboardInterrupt:
        Log.info("Server shutting down gracefully")


if __name__ == "__main__":
    main()
