"""Application layer - tag use cases."""
