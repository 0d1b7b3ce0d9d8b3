"""Shared constants for Rkit."""
