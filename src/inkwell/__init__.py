"""Inkwell: a personal journal with local and remote-synced storage."""

__version__ = "0.1.0"
