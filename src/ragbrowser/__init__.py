"""RAG Web Browser — Web search and content extraction over HTTP and stdio."""

__version__ = "1.0.0"
