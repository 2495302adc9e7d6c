from dataclasses import asdict

import pytest

from locus.models import NOPOS, UNRESOLVED, Location, Position, Range, SourceSpan, Span


def test_span_creation():
    span = Span(start=3, end=7)
    assert span.start == 3
    assert span.end == 7
    assert span.is_known


def test_span_rejects_start_after_end():
    with pytest.raises(ValueError):
        Span(start=8, end=2)


def test_span_allows_unknown_ends():
    assert not Span(start=5, end=NOPOS).is_known
    assert not Span(start=NOPOS, end=NOPOS).is_known


def test_unresolved_position_is_sentinel():
    assert UNRESOLVED == Position(line=-1, character=-1)
    assert not UNRESOLVED.is_resolved
    assert Position(line=0, character=0).is_resolved


def test_range_is_resolved_only_when_both_ends_are():
    valid = Position(line=1, character=2)
    assert Range(start=valid, end=valid).is_resolved
    assert not Range(start=valid, end=UNRESOLVED).is_resolved


def test_location_to_dict():
    location = Location(
        uri="file:///src/Foo.java",
        range=Range(start=Position(line=1, character=13), end=Position(line=1, character=16)),
    )

    assert asdict(location) == {
        "uri": "file:///src/Foo.java",
        "range": {
            "start": {"line": 1, "character": 13},
            "end": {"line": 1, "character": 16},
        },
    }


def test_source_span_creation():
    span = SourceSpan(file_name="Foo.java", start_offset=0, end_offset=10)
    assert span.file_name == "Foo.java"
    assert span.end_offset == 10
