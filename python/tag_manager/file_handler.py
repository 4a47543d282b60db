"""Path handling: input cleanup, folder expansion and support filtering."""

import os
from pathlib import Path
from typing import Iterable, List

from tag_manager.audio_file import AudioFile, AudioFileError
from tag_manager.config import eprint


def clean_path(path: str) -> str:
    """Remove one pair of surrounding double quotes, if present."""
    if not path:
        return ""
    if len(path) >= 2 and path[0] == '"' and path[-1] == '"':
        return path[1:-1]
    return path


def path_is_dir(path: str) -> bool:
    """Check if path points to a directory."""
    return os.path.isdir(path)


def get_all_files_in_dir(dir_path: str) -> List[str]:
    """
    Recursively list every regular file inside a directory.

    Entries are visited in sorted order so repeated runs see the same
    sequence. Folders that can't be listed are reported and skipped.
    """
    def on_error(error):
        eprint(f"Exception while gathering files: {error}")

    result = []
    for root, dirs, files in os.walk(dir_path, onerror=on_error):
        dirs.sort()
        for name in sorted(files):
            file_path = os.path.join(root, name)
            if os.path.isfile(file_path):
                result.append(file_path)
    return result


def is_supported(path: str) -> bool:
    """Check whether mutagen can open path with a key/value tag interface."""
    try:
        with AudioFile.open(path):
            return True
    except AudioFileError:
        return False


def gather_all_files(paths: Iterable[str], filter_for_support: bool) -> List[str]:
    """
    Turn a list of file and folder paths into a flat list of files.

    Args:
        paths: Raw paths from the command line (may be quoted)
        filter_for_support: Drop files mutagen cannot handle

    Returns:
        Files in input order, folder contents in traversal order.
    """
    result = []

    for raw_path in paths:
        path = clean_path(raw_path)
        if not path:
            continue

        try:
            if path_is_dir(path):
                result.extend(get_all_files_in_dir(path))
            else:
                result.append(path)
        except OSError as e:
            eprint(f"Exception while gathering files: {e}")

    if filter_for_support:
        supported = []
        for path in result:
            try:
                usable = is_supported(path)
            except Exception as e:
                eprint(f"Exception while probing {path}: {e}")
                continue
            if usable:
                supported.append(path)
            else:
                eprint(f"WARN: Unsupported file provided as input: {get_filename_of(path)}")
        result = supported

    return result


def get_filename_of(path: str) -> str:
    """Get the last component of a path, extension included."""
    return Path(path).name


def get_ext_of(path: str) -> str:
    """Get the extension of a path, including the dot."""
    return Path(path).suffix


def get_dir_of(path: str) -> str:
    """Get the parent folder of a path."""
    return str(Path(path).parent)


def read_image_bytes(image_path: str) -> bytes:
    """Read an image file for embedding. An empty path yields no data."""
    if not image_path:
        return b""
    with open(image_path, "rb") as image_file:
        return image_file.read()


def export_file(data: bytes, filename: str) -> bool:
    """
    Write data to filename.

    Returns:
        True if the file was written, False otherwise.
    """
    try:
        with open(filename, "wb") as out_file:
            out_file.write(data)
        return True
    except OSError as e:
        eprint(f"Exception while exporting data to {filename}: {e}")
        return False
