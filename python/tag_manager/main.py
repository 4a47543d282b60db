#!/usr/bin/env python3
"""
Tag Manager - batch audio tag reading and writing.

Usage:
    python -m tag_manager -i /path/to/album -r --all
"""

import argparse
import sys
from typing import Dict, List, Optional

from mutagen import MutagenError

from tag_manager import __version__
from tag_manager.audio_file import AudioFile, AudioFileError
from tag_manager.config import PROG_NAME, eprint
from tag_manager.console import ConsoleOutput
from tag_manager.cover_art import add_cover_image, clear_cover_images, extract_cover_images
from tag_manager.file_handler import gather_all_files, get_filename_of
from tag_manager.models import ImageCache, RunStats, TagType
from tag_manager.tag_handler import find_all_defined_props, read_props, write_props


# Command line aliases of every tag that can be read or written directly
BASIC_TAGS = [
    (("-a", "--artist"), TagType.ARTIST),
    (("-b", "--bpm"), TagType.BPM),
    (("-A", "--album"), TagType.ALBUM),
    (("-t", "--title"), TagType.TITLE),
    (("-y", "--year"), TagType.YEAR),
    (("-c", "--comment"), TagType.COMMENT),
    (("-g", "--genre"), TagType.GENRE),
]


def _dest(aliases) -> str:
    return aliases[-1].lstrip("-").replace("-", "_")


class TagManager:
    """Runs a read or write pass over the input files."""

    def __init__(self, args: argparse.Namespace, console: ConsoleOutput):
        """
        Initialize the tag manager.

        Args:
            args: CLI arguments
            console: Output handler
        """
        self.args = args
        self.console = console
        self.stats = RunStats()

    def run(self) -> None:
        """Gather the input files and run the selected mode over them."""
        try:
            input_files = gather_all_files(self.args.input, filter_for_support=True)
        except Exception as e:
            self.console.error(f"Exception while parsing input files: {e}")
            input_files = []

        self.stats.total_files = len(input_files)

        if self.args.read:
            self.read_files(input_files)
        elif self.args.write:
            self.write_files(input_files)

        self.console.show_summary(self.stats)

    def provided_values(self) -> Dict[TagType, str]:
        """Tag values given on the command line, keyed by tag type."""
        values = {}
        for aliases, tag_type in BASIC_TAGS:
            value = getattr(self.args, _dest(aliases), None)
            if value is not None:
                values[tag_type] = value
        return values

    @property
    def pictures_requested(self) -> bool:
        return self.args.picture is not None

    def read_files(self, input_files: List[str]) -> None:
        """Print the requested (or all defined) tags of every input file."""
        requested = set(self.provided_values())

        for file_path in input_files:
            filename = get_filename_of(file_path)
            try:
                with AudioFile.open(file_path) as audio_file:
                    if self.args.all:
                        self.console.show_props(
                            f"All defined properties of file: {filename}",
                            read_props(audio_file, find_all_defined_props(audio_file))
                        )
                    else:
                        self.console.show_props(
                            f"Properties of file: {filename}",
                            read_props(audio_file, requested)
                        )

                    # Extracting pictures is heavier, so --all doesn't imply it
                    if self.pictures_requested:
                        self._extract_pictures(audio_file)

                self.stats.files_processed += 1
            except (AudioFileError, MutagenError, OSError) as e:
                self.console.error(f"Could not read {filename}: {e}")
                self.stats.errors.append(f"{filename}: {e}")

            self.console.print()

    def _extract_pictures(self, audio_file: AudioFile) -> None:
        if extract_cover_images(audio_file):
            self.stats.covers_extracted += 1
            self.console.info(f"Successfully extracted all picture data of {audio_file.path}")
        else:
            self.stats.errors.append(f"Could not extract picture data of {audio_file.filename}")

    def write_files(self, input_files: List[str]) -> None:
        """
        Write the provided tags (and pictures) to the first input file,
        or to every input file with --all.
        """
        if not input_files:
            self.console.warn("No supported input files to write to")
            return

        if self.args.all:
            self.console.info("Writing provided tags to ALL input files")
        else:
            self.console.info(f"Writing provided tags to first input file - {input_files[0]}")

        values = self.provided_values()

        # Images are the same for every file, so resolve them once
        image_paths = []
        if self.pictures_requested:
            image_paths = gather_all_files(self.args.picture, filter_for_support=False)
        image_cache = ImageCache()

        targets = input_files if self.args.all else input_files[:1]
        for file_path in targets:
            self._write_file(file_path, values, image_paths, image_cache)

    def _write_file(self, file_path: str, values: Dict[TagType, str],
                    image_paths: List[str], image_cache: ImageCache) -> None:
        filename = get_filename_of(file_path)
        self.console.print(f"Writing properties to {filename}")

        try:
            with AudioFile.open(file_path) as audio_file:
                if write_props(audio_file, values):
                    self.stats.tags_written += len(values)
                else:
                    self.stats.errors.append(f"Could not save tags of {filename}")

                if self.console.verbose:
                    self.console.show_props(
                        f"Properties of file: {filename}",
                        read_props(audio_file, values.keys())
                    )
                    self.console.print()

                if self.pictures_requested:
                    self._write_pictures(audio_file, image_paths, image_cache)

            self.stats.files_processed += 1
        except (AudioFileError, MutagenError, OSError) as e:
            self.console.error(f"Could not write {filename}: {e}")
            self.stats.errors.append(f"{filename}: {e}")

    def _write_pictures(self, audio_file: AudioFile, image_paths: List[str],
                        image_cache: ImageCache) -> None:
        """Replace the file's pictures with image_paths (none clears them)."""
        filename = audio_file.filename

        if not clear_cover_images(audio_file):
            self.stats.errors.append(f"Could not remove picture data of {filename}")
            return
        self.stats.covers_cleared += 1

        if not image_paths:
            self.console.info(f"All picture data removed from {filename}\n")

        for image_path in image_paths:
            if add_cover_image(audio_file, image_path, image_cache):
                self.stats.covers_added += 1
                self.console.info(f"Cover image {get_filename_of(image_path)} added to {filename}\n")
            else:
                self.stats.errors.append(f"Could not add {get_filename_of(image_path)} to {filename}")


class TagManagerArgumentParser(argparse.ArgumentParser):
    """Argument parser that exits with status 1 and full help on errors."""

    def error(self, message):
        eprint(message)
        self.print_help()
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    """Build argument parser."""
    parser = TagManagerArgumentParser(
        prog=PROG_NAME,
        description="Read and write audio tags and cover art in bulk.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show every known tag of every file in a folder
  epictagmanager -i /path/to/album -r --all

  # Show artist and title, and extract embedded covers
  epictagmanager -i song.mp3 -r -a -t -p

  # Set the album of every file in a folder
  epictagmanager -i /path/to/album -w --all -A "Album Name"

  # Replace the cover of every file (no paths after -p removes covers)
  epictagmanager -i /path/to/album -w --all -p cover.jpg
"""
    )

    parser.add_argument(
        "-i", "--input",
        nargs="+",
        required=True,
        metavar="PATHS",
        help="All processable files and folders"
    )

    # Mode
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "-r", "--read",
        action="store_true",
        help="Use read mode: read all provided tags from input files"
    )
    mode.add_argument(
        "-w", "--write",
        action="store_true",
        help="Use write mode: write all provided tags to the input files, "
             "replacing any previous values"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Output extra information about what the app is doing"
    )

    parser.add_argument(
        "--all",
        action="store_true",
        help="Read mode: read all tags the input files have. "
             "Write mode: write to all input files instead of the first one"
    )

    # Tags
    basic_tags = parser.add_argument_group(
        "Basic tags",
        "Read the passed tags in read mode, write the passed values in write mode"
    )
    for aliases, tag_type in BASIC_TAGS:
        basic_tags.add_argument(
            *aliases,
            dest=_dest(aliases),
            nargs="?",
            const="",
            default=None,
            metavar="VALUE",
            help=f"Use the {tag_type.name} tag"
        )

    parser.add_argument(
        "-p", "--picture",
        nargs="*",
        default=None,
        metavar="PATHS",
        help="Use the PICTURE tag. Pass it alone when reading to extract all "
             "picture data, or with image paths when writing"
    )

    # Output
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()

    if not argv:
        parser.print_help()
        return 0

    args = parser.parse_args(argv)

    if not (args.read or args.write):
        parser.print_help()
        return 0

    console = ConsoleOutput(no_color=args.no_color, verbose=args.verbose)
    manager = TagManager(args, console)

    try:
        manager.run()
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
