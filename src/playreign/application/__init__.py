"""Application layer: replay services and event sources."""
