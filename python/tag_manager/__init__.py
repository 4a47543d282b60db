"""
Tag Manager - batch audio tag reading and writing.

This package provides tools to:
- Read selected or all known tags from audio files
- Replace tag values on one or many files at once
- Embed, clear and extract cover art
- Expand folders into the audio files they contain
"""

__version__ = "1.0.0"
