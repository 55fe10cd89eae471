"""Infrastructure layer - configuration and logging setup."""
