"""
LED animation converter

Turns decoded image frames into TwinCAT DWORD pixel arrays (structured text,
global variable lists) and JSON interchange files.
"""

__version__ = "1.0.0"
