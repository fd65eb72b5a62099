"""Certificate adapters."""
