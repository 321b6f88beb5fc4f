"""Core models and schemas for API I/O."""
