"""Application layer: service orchestrators used by the HTTP API."""
