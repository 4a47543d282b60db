"""Shared constants and diagnostics output for Tag Manager."""

import sys


PROG_NAME = "epictagmanager"

# Cover images with any other extension are still embedded, with a warning
IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg"}

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"
MIME_PNG = "image/png"
MIME_JPEG = "image/jpeg"

# ID3/FLAC picture type for "Cover (front)"
FRONT_COVER = 3
FRONT_COVER_NAME = "Front Cover"


def eprint(*args, **kwargs):
    """Print to stderr."""
    print(*args, file=sys.stderr, **kwargs)
