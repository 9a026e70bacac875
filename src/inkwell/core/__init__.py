"""Shared infrastructure: configuration, logging, events, storage, CLI."""
