"""Provider adapters binding resource kinds to cloud APIs."""
