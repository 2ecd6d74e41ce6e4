"""API middleware."""
