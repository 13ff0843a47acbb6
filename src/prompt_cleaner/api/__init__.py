"""HTTP API for the prompt cleaner."""
