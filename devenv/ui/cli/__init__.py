"""CLI command groups, registered on the root group in devenv.main."""
