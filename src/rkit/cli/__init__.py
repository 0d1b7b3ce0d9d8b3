"""Command-line interface for Rkit."""
