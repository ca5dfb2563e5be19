"""Matroska level-1 elements and the structures they hold."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable

from workbench.ebml import (
    Buffer,
    IncompleteError,
    binary,
    read_bool,
    read_float,
    read_string,
    skip,
    uint,
    vid,
    vint,
)

Reader = Callable[[Buffer], tuple]


class ElementKind(Enum):
    SEEK_HEAD = auto()
    INFO = auto()
    TRACKS = auto()
    CHAPTERS = auto()
    CLUSTER = auto()
    CUES = auto()
    ATTACHMENTS = auto()
    TAGS = auto()
    VOID = auto()
    UNKNOWN = auto()


def _body(data: Buffer) -> tuple[memoryview, memoryview]:
    """Split off a sized element body; return ``(rest, body)``."""
    rest, size = vint(data)
    view = memoryview(rest)
    if len(view) < size:
        raise IncompleteError(size)
    return view[size:], view[:size]


def _fill(body: Buffer, target: object, readers: dict[int, tuple[str, Reader]]) -> None:
    """Read child elements into attributes of ``target``; list attributes collect repeats."""
    body = memoryview(body)
    while body:
        body, element_id = vid(body)
        entry = readers.get(element_id)
        if entry is None:
            body, size = skip(body)
            print(f"Ignore element {element_id:x} of {size:x} bytes", file=sys.stderr)
            continue
        name, reader = entry
        body, value = reader(body)
        current = getattr(target, name)
        if isinstance(current, list):
            current.append(value)
        else:
            setattr(target, name, value)


@dataclass
class Seek:
    """Position of one level-1 element inside the segment."""

    id: bytes = b""
    position: int = 0

    @classmethod
    def parse(cls, data: Buffer) -> tuple[memoryview, "Seek"]:
        rest, body = _body(data)
        seek = cls()
        _fill(body, seek, _SEEK_READERS)
        return rest, seek


@dataclass
class SeekHead:
    """Index of the level-1 elements."""

    positions: list[Seek] = field(default_factory=list)

    @classmethod
    def parse(cls, data: Buffer) -> tuple[memoryview, "SeekHead"]:
        rest, body = _body(data)
        seek_head = cls()
        _fill(body, seek_head, _SEEK_HEAD_READERS)
        return rest, seek_head


@dataclass
class Info:
    """General information about the segment."""

    uid: bytes = b""
    filename: str = ""
    prev_uid: bytes = b""
    prev_filename: str = ""
    next_uid: bytes = b""
    next_filename: str = ""
    timecode_scale: int = 0
    duration: float = 0.0
    title: str = ""
    date_utc: int = 0
    muxing_app: str = ""
    writing_app: str = ""

    @classmethod
    def parse(cls, data: Buffer) -> tuple[memoryview, "Info"]:
        rest, body = _body(data)
        info = cls()
        _fill(body, info, _INFO_READERS)
        return rest, info


@dataclass
class Video:
    """Video settings of a track."""

    pixel_width: int = 0
    pixel_height: int = 0
    pixel_crop_bottom: int = 0
    pixel_crop_top: int = 0
    pixel_crop_left: int = 0
    pixel_crop_right: int = 0
    display_width: int = 0
    display_height: int = 0
    display_unit: int = 0

    @classmethod
    def parse(cls, data: Buffer) -> tuple[memoryview, "Video"]:
        rest, body = _body(data)
        video = cls()
        _fill(body, video, _VIDEO_READERS)
        if video.display_width == 0:
            video.display_width = video.pixel_width
        if video.display_height == 0:
            video.display_height = video.pixel_height
        return rest, video


@dataclass
class Audio:
    """Audio settings of a track."""

    sampling_frequency: int = 0
    output_sampling_frequency: int = 0
    channels: int = 0
    bit_depth: int = 0

    @classmethod
    def parse(cls, data: Buffer) -> tuple[memoryview, "Audio"]:
        rest, body = _body(data)
        audio = cls(sampling_frequency=8000, channels=1)
        _fill(body, audio, _AUDIO_READERS)
        if audio.output_sampling_frequency == 0:
            audio.output_sampling_frequency = audio.sampling_frequency
        return rest, audio


@dataclass
class ContentEncodings:
    """Content encodings of a track; the body is skipped."""

    @classmethod
    def parse(cls, data: Buffer) -> tuple[memoryview, "ContentEncodings"]:
        rest, _ = skip(data)
        return rest, cls()


@dataclass
class Track:
    """One track entry."""

    number: int = 0
    uid: int = 0
    track_type: int = 0
    enabled: bool = True
    default: bool = True
    forced: bool = False
    lacing: bool = False
    min_cache: int = 0
    max_cache: int = 0
    default_duration: int = 0
    timecode_scale: float = 0.0
    name: str = ""
    language: str = ""
    codec_id: str = ""
    codec_private: bytes = b""
    codec_name: str = ""
    attachment_link: int = 0
    video: Video = field(default_factory=Video)
    audio: Audio = field(default_factory=Audio)
    content_encodings: ContentEncodings = field(default_factory=ContentEncodings)

    @classmethod
    def parse(cls, data: Buffer) -> tuple[memoryview, "Track"]:
        rest, body = _body(data)
        track = cls()
        _fill(body, track, _TRACK_READERS)
        return rest, track


@dataclass
class Tracks:
    """All track entries of the segment."""

    tracks: list[Track] = field(default_factory=list)

    @classmethod
    def parse(cls, data: Buffer) -> tuple[memoryview, "Tracks"]:
        rest, body = _body(data)
        tracks = cls()
        _fill(body, tracks, _TRACKS_READERS)
        return rest, tracks


@dataclass
class Level1Element:
    """A top-level element of a segment.

    ``value`` is the parsed structure for seek heads, info and tracks, the
    body size for void and unknown elements, and None otherwise.
    """

    kind: ElementKind
    value: object = None

    @classmethod
    def parse(cls, data: Buffer) -> tuple[memoryview, "Level1Element"]:
        rest, element_id = vid(data)
        structured = _STRUCTURED.get(element_id)
        if structured is not None:
            kind, parser = structured
            rest, value = parser(rest)
            return rest, cls(kind, value)
        opaque = _OPAQUE.get(element_id)
        if opaque is not None:
            return opaque(rest)
        rest, size = skip(rest)
        kind = ElementKind.VOID if element_id == 0xEC else ElementKind.UNKNOWN
        return rest, cls(kind, size)


def _opaque(data: Buffer, kind: ElementKind) -> tuple[memoryview, Level1Element]:
    rest, _ = _body(data)
    return rest, Level1Element(kind)


def cluster(data: Buffer) -> tuple[memoryview, Level1Element]:
    """Skip a cluster body."""
    return _opaque(data, ElementKind.CLUSTER)


def chapters(data: Buffer) -> tuple[memoryview, Level1Element]:
    """Skip a chapters body."""
    return _opaque(data, ElementKind.CHAPTERS)


def tags(data: Buffer) -> tuple[memoryview, Level1Element]:
    """Skip a tags body."""
    return _opaque(data, ElementKind.TAGS)


def attachments(data: Buffer) -> tuple[memoryview, Level1Element]:
    """Skip an attachments body."""
    return _opaque(data, ElementKind.ATTACHMENTS)


def cues(data: Buffer) -> tuple[memoryview, Level1Element]:
    """Skip a cues body."""
    return _opaque(data, ElementKind.CUES)


_STRUCTURED: dict[int, tuple[ElementKind, Reader]] = {
    0x114D9B74: (ElementKind.SEEK_HEAD, SeekHead.parse),
    0x1549A966: (ElementKind.INFO, Info.parse),
    0x1654AE6B: (ElementKind.TRACKS, Tracks.parse),
}

_OPAQUE: dict[int, Reader] = {
    0x1F43B675: cluster,
    0x1043A770: chapters,
    0x1254C367: tags,
    0x1941A469: attachments,
    0x1C53BB6B: cues,
}

_SEEK_HEAD_READERS: dict[int, tuple[str, Reader]] = {
    0x4DBB: ("positions", Seek.parse),
}

_SEEK_READERS: dict[int, tuple[str, Reader]] = {
    0x53AB: ("id", binary),
    0x53AC: ("position", uint),
}

_INFO_READERS: dict[int, tuple[str, Reader]] = {
    0x73A4: ("uid", binary),
    0x7384: ("filename", read_string),
    0x3CB923: ("prev_uid", binary),
    0x3C83AB: ("prev_filename", read_string),
    0x3EB923: ("next_uid", binary),
    0x3C83BB: ("next_filename", read_string),
    0x2AD7B1: ("timecode_scale", uint),
    0x4489: ("duration", read_float),
    0x7BA9: ("title", read_string),
    0x4D80: ("muxing_app", read_string),
    0x5741: ("writing_app", read_string),
    0x4461: ("date_utc", uint),
}

_TRACKS_READERS: dict[int, tuple[str, Reader]] = {
    0xAE: ("tracks", Track.parse),
}

_TRACK_READERS: dict[int, tuple[str, Reader]] = {
    0xD7: ("number", uint),
    0x73C5: ("uid", uint),
    0x83: ("track_type", uint),
    0xB9: ("enabled", read_bool),
    0x55AA: ("forced", read_bool),
    0x9C: ("lacing", read_bool),
    0x6DE7: ("min_cache", uint),
    0x6DF8: ("max_cache", uint),
    0x23E383: ("default_duration", uint),
    0x23314F: ("timecode_scale", read_float),
    0x536E: ("name", read_string),
    0x22B59C: ("language", read_string),
    0x86: ("codec_id", read_string),
    0x63A2: ("codec_private", binary),
    0x258688: ("codec_name", read_string),
    0x7446: ("attachment_link", uint),
    0xE0: ("video", Video.parse),
    0xE1: ("audio", Audio.parse),
    0x6D80: ("content_encodings", ContentEncodings.parse),
}

_VIDEO_READERS: dict[int, tuple[str, Reader]] = {
    0xB0: ("pixel_width", uint),
    0xBA: ("pixel_height", uint),
    0x54AA: ("pixel_crop_bottom", uint),
    0x54BB: ("pixel_crop_top", uint),
    0x54CC: ("pixel_crop_left", uint),
    0x54DD: ("pixel_crop_right", uint),
    0x54B0: ("display_width", uint),
    0x54BA: ("display_height", uint),
    0x54B2: ("display_unit", uint),
}

_AUDIO_READERS: dict[int, tuple[str, Reader]] = {
    0xB5: ("sampling_frequency", uint),
    0x78B5: ("output_sampling_frequency", uint),
    0x9F: ("channels", uint),
    0x6264: ("bit_depth", uint),
}