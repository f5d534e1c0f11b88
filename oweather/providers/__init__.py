"""Weather data providers."""
