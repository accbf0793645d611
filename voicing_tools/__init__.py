"""
voicing_tools/ — Tool layer over voicing_core: validated tools, registry,
settings and MIDI export.
"""
