"""Settings and filesystem layout."""
