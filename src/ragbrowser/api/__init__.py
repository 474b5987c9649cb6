"""HTTP API — FastAPI front-end."""
