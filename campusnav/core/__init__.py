"""Core - configuration, auth, logging and domain errors."""
