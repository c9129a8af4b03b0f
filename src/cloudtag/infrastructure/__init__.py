"""Infrastructure layer - logging, exceptions and provider registry."""
