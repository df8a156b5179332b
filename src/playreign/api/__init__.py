"""API layer: response schemas for the timelines."""
