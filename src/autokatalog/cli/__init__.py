"""Command-line interface for autokatalog."""
