"""Domain layer - tag value objects, exceptions and provider ports."""
