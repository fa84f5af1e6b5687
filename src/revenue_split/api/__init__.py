"""HTTP API for the revenue split service."""
