"""Stdio tool server — MCP front-end."""
