"""Reading and writing tag values through the property map."""

from typing import Dict, Iterable, List, Set

from mutagen import MutagenError

from tag_manager.audio_file import AudioFile, AudioFileError
from tag_manager.config import eprint
from tag_manager.models import TagType
from tag_manager.tag_keys import key_of, tag_type_of


def read_props(audio_file: AudioFile, props: Iterable[TagType]) -> Dict[TagType, List[str]]:
    """
    Read the requested tags from a file.

    Args:
        audio_file: Open audio file
        props: Tag types to read

    Returns:
        Dict of tag type -> values, ordered by tag type. Tags the file
        doesn't have map to an empty list.
    """
    result = {}
    for tag_type in sorted(set(props), key=lambda t: t.value):
        result[tag_type] = audio_file.get_property(key_of(tag_type))
    return result


def find_all_defined_props(audio_file: AudioFile) -> Set[TagType]:
    """Find every known tag type that has at least one value in the file."""
    result = set()
    for key, values in audio_file.properties().items():
        if not values:
            continue
        tag_type = tag_type_of(key)
        if tag_type != TagType.UNDEFINED:
            result.add(tag_type)
    return result


def write_props(audio_file: AudioFile, values: Dict[TagType, str]) -> bool:
    """
    Replace tags in a file and save it.

    Each value replaces everything previously stored under its tag,
    including multiple values.

    Args:
        audio_file: Open audio file
        values: Tag type -> new value

    Returns:
        True if the file was saved, False otherwise.
    """
    try:
        for tag_type, value in values.items():
            audio_file.set_property(key_of(tag_type), [value])
        audio_file.save()
        return True
    except (MutagenError, AudioFileError, OSError, ValueError, KeyError) as e:
        eprint(f"Error writing tags to {audio_file.path}: {e}")
        audio_file.close()
        return False


def format_props(props: Dict[TagType, List[str]]) -> List[str]:
    """Format a property set as indented "KEY: values" lines."""
    return [
        f"    {key_of(tag_type).upper()}: {', '.join(values)}"
        for tag_type, values in props.items()
    ]


def print_props(props: Dict[TagType, List[str]]) -> None:
    for line in format_props(props):
        print(line)
