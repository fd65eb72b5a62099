"""
Generators — produce the files dev-env writes into the environment
directory: the compose manifest, the traefik bootstrap config and the
per-project nginx server blocks.
"""
