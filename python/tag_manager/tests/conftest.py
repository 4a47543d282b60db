"""Shared test fixtures for tag_manager tests."""

import struct
import sys
from pathlib import Path

import pytest
from mutagen.ogg import OggPage

# Add the folder holding the package to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

# MPEG-1 Layer III, 128 kbps, 44.1 kHz, joint stereo: 417 byte frames
MP3_FRAME = b"\xff\xfb\x90\x64" + b"\x00" * 413

PNG_DATA = b"\x89PNG\r\n\x1a\n" + b"\x00\x00\x00\rIHDR" + b"\x01" * 32
JPEG_DATA = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00" + b"\x02" * 32


def _write_mp3(path: Path) -> Path:
    """Write a tagless MP3 made of silent frames."""
    path.write_bytes(MP3_FRAME * 20)
    return path


def _write_flac(path: Path) -> Path:
    """Write a FLAC file holding only a STREAMINFO block."""
    # 44100 Hz, 2 channels, 16 bits per sample, 0 samples
    packed = (44100 << 44) | (1 << 41) | (15 << 36)
    streaminfo = (
        struct.pack(">HH", 4096, 4096)
        + b"\x00" * 6
        + packed.to_bytes(8, "big")
        + b"\x00" * 16
    )
    # Last-metadata-block flag set, type 0 (STREAMINFO), length 34
    path.write_bytes(b"fLaC" + b"\x80\x00\x00\x22" + streaminfo)
    return path


def _atom(name: bytes, payload: bytes) -> bytes:
    return struct.pack(">I", 8 + len(payload)) + name + payload


def _write_mp4(path: Path) -> Path:
    """Write a tagless M4A with no tracks: ftyp, moov(mvhd) and an empty mdat."""
    ftyp = _atom(b"ftyp", b"M4A " + b"\x00" * 4 + b"M4A mp42isom")
    # Version 0 mvhd: created, modified, timescale 1000, duration 1000
    mvhd = _atom(b"mvhd", b"\x00" * 4 + struct.pack(">IIII", 0, 0, 1000, 1000) + b"\x00" * 80)
    path.write_bytes(ftyp + _atom(b"moov", mvhd) + _atom(b"mdat", b""))
    return path


def _write_ogg(path: Path) -> Path:
    """Write an Ogg Vorbis stream with empty comments and one audio packet."""
    # Version 0, 2 channels, 44100 Hz, 128 kbps nominal, block sizes 256/2048, framing bit
    ident = b"\x01vorbis" + struct.pack("<IBIiiiBB", 0, 2, 44100, 0, 128000, 0, 0xB8, 1)
    # Empty vendor string, no comments, framing bit
    comment = b"\x03vorbis" + struct.pack("<II", 0, 0) + b"\x01"
    setup = b"\x05vorbis" + b"\x00" * 20

    pages = []
    for sequence, packets in enumerate([[ident], [comment, setup], [b"\x00" * 10]]):
        page = OggPage()
        page.serial = 1
        page.sequence = sequence
        page.packets = packets
        pages.append(page)
    pages[0].first = True
    pages[-1].position = 44100
    pages[-1].last = True

    path.write_bytes(b"".join(page.write() for page in pages))
    return path


WRITERS = {
    ".mp3": _write_mp3,
    ".flac": _write_flac,
    ".m4a": _write_mp4,
    ".ogg": _write_ogg,
}


@pytest.fixture
def make_audio():
    """Build a tagless audio file, picking the format from the extension."""
    def _make(path: Path) -> Path:
        return WRITERS[path.suffix](path)
    return _make


@pytest.fixture
def png_data():
    return PNG_DATA


@pytest.fixture
def jpeg_data():
    return JPEG_DATA


@pytest.fixture
def mp3_file(tmp_path, make_audio):
    """A single tagless MP3."""
    return make_audio(tmp_path / "song.mp3")


@pytest.fixture
def flac_file(tmp_path, make_audio):
    """A single tagless FLAC."""
    return make_audio(tmp_path / "track.flac")


@pytest.fixture
def mp4_file(tmp_path, make_audio):
    """A single tagless M4A."""
    return make_audio(tmp_path / "clip.m4a")


@pytest.fixture
def ogg_file(tmp_path, make_audio):
    """A single tagless Ogg Vorbis file."""
    return make_audio(tmp_path / "take.ogg")


@pytest.fixture(params=["mp3_file", "flac_file", "mp4_file", "ogg_file"])
def audio_path(request):
    """Run a test once per supported fixture format."""
    return str(request.getfixturevalue(request.param))


@pytest.fixture
def album_dir(tmp_path, make_audio):
    """A folder with three tagless MP3s."""
    album = tmp_path / "album"
    album.mkdir()
    for name in ("01.mp3", "02.mp3", "03.mp3"):
        make_audio(album / name)
    return album


@pytest.fixture
def png_file(tmp_path):
    path = tmp_path / "cover.png"
    path.write_bytes(PNG_DATA)
    return path


@pytest.fixture
def jpeg_file(tmp_path):
    path = tmp_path / "cover.jpg"
    path.write_bytes(JPEG_DATA)
    return path
