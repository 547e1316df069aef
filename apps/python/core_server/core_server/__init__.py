"""Ideas API server application."""
