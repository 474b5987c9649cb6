"""Core — search service and content transforms."""
