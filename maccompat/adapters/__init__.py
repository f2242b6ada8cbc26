"""Adapters — bindings to the host system."""
