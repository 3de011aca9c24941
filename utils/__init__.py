"""Shared helpers: typed errors, response builders, exception handlers, data loaders."""
