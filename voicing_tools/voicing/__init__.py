"""Voicing tools, discovered automatically by ToolRegistry."""
