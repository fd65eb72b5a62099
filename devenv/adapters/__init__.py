"""
Adapters — the only code that touches external tools.

    containers/  docker compose CLI
    certs/       self-signed certificate synthesis
    platform/    per-OS hosts path, engine probe, system info
"""
