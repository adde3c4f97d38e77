"""Infrastructure layer for the access bounded context."""
