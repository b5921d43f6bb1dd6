"""
termsnake - Snake in a character terminal.
"""

__version__ = "0.1.0"
