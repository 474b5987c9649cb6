"""Tavily search provider."""
