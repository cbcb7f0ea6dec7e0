"""Business logic behind the HTTP routes."""
