"""Bundled read-only data files for voicing_core."""
