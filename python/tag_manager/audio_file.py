"""Audio file handle on top of mutagen's tag interfaces."""

import base64
import os
from typing import Dict, Iterable, List

import mutagen
from mutagen import MutagenError
from mutagen.easyid3 import EasyID3
from mutagen.easymp4 import EasyMP4, EasyMP4Tags
from mutagen.flac import FLAC, Picture
from mutagen.id3 import APIC, COMM, ID3, USLT, Encoding
from mutagen.mp3 import EasyMP3
from mutagen.mp4 import MP4, MP4Cover
from mutagen.ogg import OggFileType
from mutagen.trueaudio import EasyTrueAudio

from tag_manager.config import MIME_JPEG, MIME_PNG
from tag_manager.models import CoverImage


# File types whose tags mutagen exposes as plain string key/value lists
SUPPORTED_TYPES = (EasyMP3, EasyTrueAudio, EasyMP4, FLAC, OggFileType)

# Vorbis comment field holding base64-encoded FLAC picture blocks
OGG_PICTURE_KEY = "metadata_block_picture"


class AudioFileError(Exception):
    """Raised when an audio file handle cannot perform an operation."""


class UnsupportedFileError(AudioFileError):
    """Raised when mutagen cannot open a file with a key/value tag interface."""


def _comment_get(id3, key):
    texts = [text for frame in id3.getall("COMM") if not frame.desc for text in frame.text]
    if not texts:
        raise KeyError(key)
    return texts


def _comment_set(id3, key, value):
    _comment_delete(id3, key)
    id3.add(COMM(encoding=Encoding.UTF8, lang="eng", desc="", text=value))


def _comment_delete(id3, key):
    for frame in id3.getall("COMM"):
        if not frame.desc:
            del id3[frame.HashKey]


def _lyrics_get(id3, key):
    frames = id3.getall("USLT")
    if not frames:
        raise KeyError(key)
    return [frame.text for frame in frames]


def _lyrics_set(id3, key, value):
    id3.delall("USLT")
    id3.add(USLT(encoding=Encoding.UTF8, lang="eng", desc="", text="\n".join(value)))


def _lyrics_delete(id3, key):
    id3.delall("USLT")


def _register_extra_keys():
    """Teach the easy interfaces the keys they do not map out of the box."""
    if "comment" not in EasyID3.Get:
        EasyID3.RegisterKey("comment", _comment_get, _comment_set, _comment_delete)
    if "lyrics" not in EasyID3.Get:
        EasyID3.RegisterKey("lyrics", _lyrics_get, _lyrics_set, _lyrics_delete)
    if "remixer" not in EasyID3.Get:
        EasyID3.RegisterTextKey("remixer", "TPE4")

    mp4_text_keys = {"composer": "\xa9wrt", "lyrics": "\xa9lyr"}
    for key, atom in mp4_text_keys.items():
        if key not in EasyMP4Tags.Get:
            EasyMP4Tags.RegisterTextKey(key, atom)

    mp4_freeform_keys = {"language": "LANGUAGE", "lyricist": "LYRICIST", "remixer": "REMIXER"}
    for key, name in mp4_freeform_keys.items():
        if key not in EasyMP4Tags.Get:
            EasyMP4Tags.RegisterFreeformKey(key, name)


_register_extra_keys()


def _from_flac_picture(picture: Picture) -> CoverImage:
    return CoverImage(
        data=picture.data,
        mime_type=picture.mime or MIME_JPEG,
        picture_type=int(picture.type),
        description=picture.desc,
    )


def _to_flac_picture(image: CoverImage) -> Picture:
    picture = Picture()
    picture.type = image.picture_type
    picture.mime = image.mime_type
    picture.desc = image.description
    picture.data = image.data
    return picture


class AudioFile:
    """
    Handle on the tags of a single audio file.

    Properties go through mutagen's "easy" key/value view, pictures through
    the format's native tags. Only one view is loaded at a time. Edits stay in
    memory until save() is called; closing the handle discards them.

    Use as a context manager:

        with AudioFile.open(path) as audio_file:
            audio_file.set_property("artist", ["Someone"])
            audio_file.save()
    """

    def __init__(self, path: str):
        self.path = str(path)
        self._audio = None
        self._easy = False
        self._dirty = False

    @classmethod
    def open(cls, path: str) -> "AudioFile":
        """
        Open an audio file.

        Raises:
            UnsupportedFileError: mutagen can't read the file, or the format
                has no key/value tag interface.
        """
        handle = cls(path)
        handle._view(easy=True)
        return handle

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    @property
    def filename(self) -> str:
        """Base name of the file."""
        return os.path.basename(self.path)

    @property
    def has_unsaved_changes(self) -> bool:
        return self._dirty

    def close(self) -> None:
        """Drop the loaded tags, discarding anything not saved."""
        self._audio = None
        self._dirty = False

    def save(self) -> None:
        """
        Persist pending edits.

        Raises:
            mutagen.MutagenError, OSError: the file could not be written.
        """
        if self._audio is None:
            return
        self._audio.save()
        self._dirty = False
        # Reload from disk on next access so both views stay consistent
        self._audio = None

    def _load(self, easy: bool):
        try:
            audio = mutagen.File(self.path, easy=easy)
        except MutagenError as e:
            raise UnsupportedFileError(f"{self.path}: {e}") from e

        if audio is None or (easy and not isinstance(audio, SUPPORTED_TYPES)):
            raise UnsupportedFileError(f"{self.path}: unsupported audio format")
        return audio

    def _view(self, easy: bool):
        if self._audio is not None and self._easy == easy:
            return self._audio
        if self._dirty:
            raise AudioFileError(f"{self.path}: save or close before switching between tags and pictures")

        audio = self._load(easy)
        if audio.tags is None:
            audio.add_tags()
        self._audio = audio
        self._easy = easy
        return audio

    # Property map

    def properties(self) -> Dict[str, List[str]]:
        """Return every property as key -> list of string values (keys lowercased)."""
        tags = self._view(easy=True).tags
        result = {}
        for key in tags.keys():
            values = [value for value in tags[key] if isinstance(value, str)]
            result.setdefault(key.lower(), []).extend(values)
        return result

    def get_property(self, key: str) -> List[str]:
        """Return the values stored under key, or an empty list."""
        tags = self._view(easy=True).tags
        return [value for value in tags.get(key, []) if isinstance(value, str)]

    def set_property(self, key: str, values: Iterable[str]) -> None:
        """
        Replace the values stored under key.

        Raises:
            ValueError, KeyError: the format rejects the key or value.
        """
        tags = self._view(easy=True).tags
        tags[key] = list(values)
        self._dirty = True

    # Pictures

    def pictures(self) -> List[CoverImage]:
        """Return every embedded picture in tag order."""
        audio = self._view(easy=False)

        if isinstance(audio, FLAC):
            return [_from_flac_picture(picture) for picture in audio.pictures]

        if isinstance(audio, MP4):
            return [
                CoverImage(
                    data=bytes(cover),
                    mime_type=MIME_PNG if cover.imageformat == MP4Cover.FORMAT_PNG else MIME_JPEG,
                )
                for cover in audio.tags.get("covr", [])
            ]

        if isinstance(audio, OggFileType):
            return [
                _from_flac_picture(Picture(base64.b64decode(encoded)))
                for encoded in audio.tags.get(OGG_PICTURE_KEY, [])
            ]

        if isinstance(audio.tags, ID3):
            return [
                CoverImage(
                    data=frame.data,
                    mime_type=frame.mime or MIME_JPEG,
                    picture_type=int(frame.type),
                    description=frame.desc,
                )
                for frame in audio.tags.getall("APIC")
            ]

        raise AudioFileError(f"{self.path}: pictures are not supported for this format")

    def set_pictures(self, images: List[CoverImage]) -> None:
        """Replace all embedded pictures with images (empty list removes them all)."""
        audio = self._view(easy=False)

        if isinstance(audio, FLAC):
            audio.clear_pictures()
            for image in images:
                audio.add_picture(_to_flac_picture(image))

        elif isinstance(audio, MP4):
            if "covr" in audio.tags:
                del audio.tags["covr"]
            if images:
                audio.tags["covr"] = [
                    MP4Cover(
                        image.data,
                        imageformat=MP4Cover.FORMAT_PNG if image.mime_type == MIME_PNG else MP4Cover.FORMAT_JPEG,
                    )
                    for image in images
                ]

        elif isinstance(audio, OggFileType):
            if OGG_PICTURE_KEY in audio.tags:
                del audio.tags[OGG_PICTURE_KEY]
            if images:
                audio.tags[OGG_PICTURE_KEY] = [
                    base64.b64encode(_to_flac_picture(image).write()).decode("ascii")
                    for image in images
                ]

        elif isinstance(audio.tags, ID3):
            audio.tags.delall("APIC")
            # APIC frames are keyed by description, so each needs its own
            used = set()
            for image in images:
                desc = image.description
                suffix = 1
                while desc in used:
                    desc = f"{image.description} ({suffix})"
                    suffix += 1
                used.add(desc)
                audio.tags.add(APIC(
                    encoding=Encoding.UTF8,
                    mime=image.mime_type,
                    type=image.picture_type,
                    desc=desc,
                    data=image.data,
                ))

        else:
            raise AudioFileError(f"{self.path}: pictures are not supported for this format")

        self._dirty = True
