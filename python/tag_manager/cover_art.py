"""Embedding and extracting cover art."""

import os
from typing import Optional

from mutagen import MutagenError

from tag_manager.audio_file import AudioFile, AudioFileError
from tag_manager.config import (
    FRONT_COVER, FRONT_COVER_NAME, IMAGE_EXTENSIONS, MIME_JPEG, MIME_PNG, PNG_MAGIC, eprint
)
from tag_manager.file_handler import export_file, get_ext_of, read_image_bytes
from tag_manager.models import CoverImage, ImageCache


def sniff_mime_type(data: bytes) -> str:
    """Guess an image MIME type from its first bytes (PNG, else JPEG)."""
    if data.startswith(PNG_MAGIC):
        return MIME_PNG
    return MIME_JPEG


def add_cover_image(audio_file: AudioFile, image_path: str,
                    cache: Optional[ImageCache] = None) -> bool:
    """
    Append an image as a front cover picture and save the file.

    Images with an unusual extension are still embedded: the picture tag
    accepts arbitrary bytes.

    Args:
        audio_file: Open audio file
        image_path: Image to embed; empty path does nothing
        cache: Reuses the bytes if the previous call loaded the same path

    Returns:
        True if the picture was embedded and saved, False otherwise.
    """
    if not image_path:
        return False

    ext = get_ext_of(image_path)
    if ext.lower() not in IMAGE_EXTENSIONS:
        eprint(f"WARN: Provided image {image_path} has an unusual extension: {ext}")

    try:
        if cache is not None:
            data = cache.get(image_path, read_image_bytes)
        else:
            data = read_image_bytes(image_path)
    except OSError as e:
        eprint(f"Could not read image {image_path}: {e}")
        return False

    image = CoverImage(
        data=data,
        mime_type=sniff_mime_type(data),
        picture_type=FRONT_COVER,
        description=FRONT_COVER_NAME,
    )

    try:
        pictures = audio_file.pictures()
        pictures.append(image)
        audio_file.set_pictures(pictures)
        audio_file.save()
        return True
    except (MutagenError, AudioFileError, OSError) as e:
        eprint(f"Error adding cover image to {audio_file.path}: {e}")
        audio_file.close()
        return False


def clear_cover_images(audio_file: AudioFile) -> bool:
    """Remove every embedded picture and save the file."""
    try:
        audio_file.set_pictures([])
        audio_file.save()
        return True
    except (MutagenError, AudioFileError, OSError) as e:
        eprint(f"Error removing cover images from {audio_file.path}: {e}")
        audio_file.close()
        return False


def extract_cover_images(audio_file: AudioFile) -> bool:
    """
    Export every embedded picture next to the audio file.

    Pictures are named after the audio file: "song.jpg", "song_1.png", ...

    Returns:
        True if every picture was written. Stops at the first failure, so
        earlier pictures may already be on disk.
    """
    try:
        base = os.path.splitext(audio_file.path)[0]
        for index, image in enumerate(audio_file.pictures()):
            img_name = base if index == 0 else f"{base}_{index}"
            img_name += image.extension

            if not export_file(image.data, img_name):
                eprint(f"Could not extract picture data of {img_name}")
                return False
    except Exception as e:
        eprint(f"Exception while extracting image data from {audio_file.path}: {e}")
        return False

    return True
