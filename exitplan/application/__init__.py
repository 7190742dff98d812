"""Application layer - configuration and orchestration around the domain."""
