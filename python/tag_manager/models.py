"""Data models for Tag Manager."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from tag_manager.config import FRONT_COVER, MIME_JPEG, MIME_PNG


class TagType(Enum):
    """Semantic tag types the tool knows how to read and write."""
    UNDEFINED = -1
    ALBUM = 1
    ARTIST = 2
    BPM = 3
    COMMENT = 4
    COMPOSER = 5
    YEAR = 6
    DISCNUMBER = 7
    GENRE = 8
    TITLE = 9
    TRACKNUMBER = 10
    LANGUAGE = 11
    LYRICIST = 12
    LYRICS = 13
    REMIXER = 14


@dataclass
class CoverImage:
    """A single embedded picture."""
    data: bytes
    mime_type: str = MIME_JPEG
    picture_type: int = FRONT_COVER
    description: str = ""

    @property
    def extension(self) -> str:
        """File extension to use when exporting this picture."""
        return ".png" if self.mime_type == MIME_PNG else ".jpg"


@dataclass
class ImageCache:
    """Holds the bytes of the most recently loaded image.

    Applying the same cover to a run of files (e.g. an album) only reads it
    from disk once. Loading a different path replaces the entry.
    """
    path: Optional[str] = None
    data: bytes = b""
    loads: int = 0

    def get(self, path: str, loader: Callable[[str], bytes]) -> bytes:
        """Return image bytes for path, reading through loader on a miss."""
        if path != self.path:
            self.data = loader(path)
            self.path = path
            self.loads += 1
        return self.data


@dataclass
class RunStats:
    """Statistics for a single invocation."""
    total_files: int = 0
    files_processed: int = 0
    tags_written: int = 0
    covers_added: int = 0
    covers_cleared: int = 0
    covers_extracted: int = 0
    errors: List[str] = field(default_factory=list)
