"""Command-line interface for pagelookup."""
