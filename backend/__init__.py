"""FastAPI service exposing the roster merge operations."""
