"""Apify RAG Web Browser provider."""
