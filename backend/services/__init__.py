"""Request-scoped helpers used by the API routes."""
