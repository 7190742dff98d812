"""Infrastructure layer - logging setup and wire serialization."""
