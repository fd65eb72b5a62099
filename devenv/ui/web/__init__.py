"""Flask JSON API for the desktop front-end."""
