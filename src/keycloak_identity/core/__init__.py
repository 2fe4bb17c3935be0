"""Core exceptions, value objects and entities."""
