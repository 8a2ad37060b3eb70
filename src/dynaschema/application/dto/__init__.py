"""Input DTOs."""
