import struct

import pytest

from workbench import ebml
from workbench.ebml import IncompleteError
from workbench.matroska import (
    Audio,
    ElementKind,
    Info,
    Level1Element,
    SeekHead,
    Track,
    Tracks,
    Video,
    cluster,
    cues,
)

SEEK_HEAD = bytes([0x11, 0x4D, 0x9B, 0x74])
INFO = bytes([0x15, 0x49, 0xA9, 0x66])
TRACKS = bytes([0x16, 0x54, 0xAE, 0x6B])
CUES = bytes([0x1C, 0x53, 0xBB, 0x6B])
CLUSTER = bytes([0x1F, 0x43, 0xB6, 0x75])


def size_bytes(n):
    if n < 0x7F:
        return bytes([0x80 | n])
    return bytes([0x40 | (n >> 8), n & 0xFF])


def element(element_id, payload):
    return element_id + size_bytes(len(payload)) + payload


def uint_element(element_id, value, width=1):
    return element(element_id, value.to_bytes(width, "big"))


def string_element(element_id, text):
    return element(element_id, text.encode("utf-8"))


def track_entry():
    video = element(
        b"\xE0",
        uint_element(b"\xB0", 640, 2) + uint_element(b"\xBA", 360, 2),
    )
    body = (
        uint_element(b"\xD7", 1)
        + uint_element(b"\x83", 1)
        + string_element(b"\x86", "V_VP8")
        + video
    )
    return element(b"\xAE", body)


def seek_entry(target, position):
    body = element(b"\x53\xAB", target) + uint_element(b"\x53\xAC", position, 2)
    return element(b"\x4D\xBB", body)


def segment_content():
    seek_head = element(SEEK_HEAD, seek_entry(INFO, 100) + seek_entry(TRACKS, 200))
    info = element(
        INFO,
        uint_element(b"\x2A\xD7\xB1", 1000000, 3)
        + element(b"\x44\x89", struct.pack(">d", 2.5))
        + string_element(b"\x4D\x80", "muxer"),
    )
    tracks = element(TRACKS, track_entry())
    cue = element(CUES, b"\x00\x01\x02")
    clus = element(CLUSTER, b"\x00" * 5)
    return seek_head + info + tracks + cue + clus


def test_segment_elements_in_order():
    content = segment_content()
    kinds = []
    rest = memoryview(content)
    while rest:
        rest, item = Level1Element.parse(rest)
        kinds.append(item.kind)
    assert kinds == [
        ElementKind.SEEK_HEAD,
        ElementKind.INFO,
        ElementKind.TRACKS,
        ElementKind.CUES,
        ElementKind.CLUSTER,
    ]


def test_webm_segment_via_ebml_parse():
    header_body = string_element(b"\x42\x82", "webm")
    content = segment_content()
    document = (
        ebml.EBML_HEADER_ID
        + size_bytes(len(header_body))
        + header_body
        + ebml.SEGMENT_ID
        + size_bytes(len(content))
        + content
    )
    _, (header, segment) = ebml.parse(document)
    assert header.doc_type == "webm"
    rest, first = Level1Element.parse(segment.content)
    assert first.kind is ElementKind.SEEK_HEAD
    rest, second = Level1Element.parse(rest)
    assert second.kind is ElementKind.INFO
    rest, third = Level1Element.parse(rest)
    assert third.kind is ElementKind.TRACKS
    rest, fourth = Level1Element.parse(rest)
    assert fourth.kind is ElementKind.CUES
    rest, fifth = Level1Element.parse(rest)
    assert fifth.kind is ElementKind.CLUSTER
    assert len(rest) == 0


def test_seek_head_positions():
    data = size_bytes(0)[:0]
    body = seek_entry(INFO, 100) + seek_entry(TRACKS, 200)
    data = size_bytes(len(body)) + body
    rest, seek_head = SeekHead.parse(data)
    assert len(rest) == 0
    assert [s.id for s in seek_head.positions] == [INFO, TRACKS]
    assert [s.position for s in seek_head.positions] == [100, 200]


def test_info_fields_and_unknown_skipped():
    body = (
        uint_element(b"\x2A\xD7\xB1", 1000000, 3)
        + element(b"\x44\x89", struct.pack(">d", 2.5))
        + element(b"\x7F\xFF", b"zz")
        + string_element(b"\x4D\x80", "muxer")
        + string_element(b"\x57\x41", "writer")
    )
    rest, info = Info.parse(size_bytes(len(body)) + body + b"tail")
    assert bytes(rest) == b"tail"
    assert info.timecode_scale == 1000000
    assert info.duration == 2.5
    assert info.muxing_app == "muxer"
    assert info.writing_app == "writer"
    assert info.title == ""


def test_tracks_and_video_display_fallback():
    body = track_entry()
    _, tracks = Tracks.parse(size_bytes(len(body)) + body)
    assert len(tracks.tracks) == 1
    track = tracks.tracks[0]
    assert track.number == 1
    assert track.track_type == 1
    assert track.codec_id == "V_VP8"
    assert track.enabled is True
    assert track.default is True
    assert track.forced is False
    assert track.video.pixel_width == 640
    assert track.video.display_width == 640
    assert track.video.display_height == 360


def test_video_explicit_display_size_kept():
    body = uint_element(b"\xB0", 640, 2) + uint_element(b"\x54\xB0", 320, 2)
    _, video = Video.parse(size_bytes(len(body)) + body)
    assert video.display_width == 320
    assert video.display_height == 0


def test_audio_defaults():
    _, audio = Audio.parse(size_bytes(0))
    assert audio.sampling_frequency == 8000
    assert audio.channels == 1
    assert audio.output_sampling_frequency == 8000


def test_audio_output_frequency_follows_sampling():
    body = uint_element(b"\xB5", 44100, 2) + uint_element(b"\x9F", 2)
    _, audio = Audio.parse(size_bytes(len(body)) + body)
    assert audio.output_sampling_frequency == 44100
    assert audio.channels == 2


def test_track_bool_and_float_fields():
    body = (
        uint_element(b"\x55\xAA", 1)
        + uint_element(b"\xB9", 0)
        + element(b"\x23\x31\x4F", struct.pack(">f", 1.5))
        + element(b"\x63\xA2", b"\x01\x02")
    )
    _, track = Track.parse(size_bytes(len(body)) + body)
    assert track.forced is True
    assert track.enabled is False
    assert track.timecode_scale == 1.5
    assert track.codec_private == b"\x01\x02"


def test_void_and_unknown_elements():
    rest, void = Level1Element.parse(element(b"\xEC", b"\x00\x00\x00"))
    assert void.kind is ElementKind.VOID
    assert void.value == 3
    assert len(rest) == 0
    _, unknown = Level1Element.parse(element(b"\x42\x11", b"ab"))
    assert unknown.kind is ElementKind.UNKNOWN
    assert unknown.value == 2


def test_opaque_readers():
    rest, item = cluster(size_bytes(2) + b"abcd")
    assert item.kind is ElementKind.CLUSTER
    assert bytes(rest) == b"cd"
    _, item = cues(size_bytes(0))
    assert item.kind is ElementKind.CUES


def test_truncated_body_is_incomplete():
    with pytest.raises(IncompleteError):
        Info.parse(size_bytes(10) + b"\x00\x00")