"""Application layer - use cases and business logic."""
