"""
Use cases — the commands the CLI and the web API expose.

Each one takes a Workspace, runs under the registry lock, validates
before mutating, provisions files and persists through the store.
"""
