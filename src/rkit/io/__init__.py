"""Shared file I/O helpers."""

from .json_io import load_json_file, temp_path_for, write_json_atomic, write_text_atomic

__all__ = ["load_json_file", "temp_path_for", "write_json_atomic", "write_text_atomic"]
