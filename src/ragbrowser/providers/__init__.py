"""Search provider layer — Interchangeable web search backends.

Built-in providers:
  - tavily: Tavily search API (direct REST search with raw page content)
  - apify: Apify RAG Web Browser (search + scrape proxy)

Implement ``SearchProvider`` and add it to the selector map to plug in another
backend.
"""
