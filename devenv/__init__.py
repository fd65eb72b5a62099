"""dev-env — local HTTPS environments for PHP projects."""

__version__ = "0.1.0"
