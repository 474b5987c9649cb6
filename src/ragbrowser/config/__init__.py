"""Configuration — settings loaded from environment, .env and YAML."""
