"""Mapping between semantic tag types and mutagen property keys."""

from tag_manager.models import TagType


# Keys of mutagen's "easy" key/value interface (EasyID3, EasyMP4, Vorbis comments)
PROP_KEYS = {
    TagType.ALBUM: "album",
    TagType.ARTIST: "artist",
    TagType.BPM: "bpm",
    TagType.COMMENT: "comment",
    TagType.COMPOSER: "composer",
    TagType.YEAR: "date",
    TagType.DISCNUMBER: "discnumber",
    TagType.GENRE: "genre",
    TagType.TITLE: "title",
    TagType.TRACKNUMBER: "tracknumber",
    TagType.LANGUAGE: "language",
    TagType.LYRICIST: "lyricist",
    TagType.LYRICS: "lyrics",
    TagType.REMIXER: "remixer",
}


def key_of(tag_type: TagType) -> str:
    """Return the property key for a tag type."""
    return PROP_KEYS[tag_type]


def tag_type_of(key: str) -> TagType:
    """
    Find the tag type stored under a property key.

    Args:
        key: Property key, matched exactly (case-sensitive)

    Returns:
        The matching TagType, or TagType.UNDEFINED if the key is unknown.
    """
    for tag_type, prop_key in PROP_KEYS.items():
        if key == prop_key:
            return tag_type
    return TagType.UNDEFINED
