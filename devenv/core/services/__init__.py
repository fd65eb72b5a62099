"""Core services — pure transformations over the registry."""
