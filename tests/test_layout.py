"""Tests for layout.py – placed blocks on the weekly grid."""
from schedule_synth.colors import ColorAssignment, assign_colors
from schedule_synth.config import DEFAULT_COLOR, DEFAULT_PALETTE, GridConfig
from schedule_synth.conflicts import detect_conflicts
from schedule_synth.layout import format_location, layout, time_labels
from schedule_synth.models import ConflictPair

from conftest import make_section


def _colors(sections):
    state = ColorAssignment()
    assign_colors(sections, state)
    return state


def test_mwf_expands_to_three_blocks():
    sections = [make_section(1, "CS180", ("MWF", "09:00:00", "PT50M"))]
    blocks = layout(sections, [], _colors(sections))
    assert [(b.day_index, b.start_slot, b.num_slots) for b in blocks] == [
        (0, 4, 2),
        (2, 4, 2),
        (4, 4, 2),
    ]
    assert all(b.section_id == 1 for b in blocks)
    assert all(b.color == DEFAULT_PALETTE[0] for b in blocks)
    assert not any(b.conflict for b in blocks)


def test_meeting_before_window_dropped():
    sections = [make_section(1, "CS180", ("MWF", "06:30:00", "PT50M"))]
    assert layout(sections, [], _colors(sections)) == []


def test_meeting_at_window_end_dropped_not_clipped():
    config = GridConfig(start_hour=7, end_hour=22)
    sections = [
        make_section(1, "CS180", ("M", "22:00:00", "PT50M")),
        make_section(2, "MA261", ("M", "21:30:00", "PT2H")),
    ]
    blocks = layout(sections, [], _colors(sections), config)
    assert len(blocks) == 1
    assert blocks[0].section_id == 2
    # Runs past the window but keeps its full length
    assert (blocks[0].start_slot, blocks[0].num_slots) == (29, 4)


def test_conflict_flag(cs180_ma261):
    extra = make_section(3, "ENGL106", ("TR", "09:00:00", "PT1H15M"))
    sections = cs180_ma261 + [extra]
    conflicts = detect_conflicts(sections)
    blocks = layout(sections, conflicts, _colors(sections))
    flagged = {b.section_id for b in blocks if b.conflict}
    assert flagged == {1, 2}


def test_conflict_flag_comes_from_pairs_given():
    sections = [make_section(1, "CS180", ("M", "09:00:00", None))]
    pairs = [ConflictPair((1, 99), ("CS180", "X"))]
    assert layout(sections, pairs, _colors(sections))[0].conflict is True


def test_missing_color_falls_back_to_default():
    sections = [make_section(1, "CS180", ("M", "09:00:00", None))]
    blocks = layout(sections, [], ColorAssignment())
    assert blocks[0].color == DEFAULT_COLOR


def test_block_content():
    section = make_section(7, "CS180", ("TR", "13:30:00", "PT1H15M"), label="CS 180")
    section.title = "Problem Solving And Object-Oriented Programming"
    section.meetings[0].room = {"Building": {"ShortCode": "LWSN"}, "Number": "B151"}
    blocks = layout([section], [], _colors([section]))
    content = blocks[0].content
    assert content["course"] == "CS 180"
    assert content["type"] == "Lecture"
    assert content["location"] == "LWSN B151"
    assert content["time"] == "1:30PM-2:45PM"
    assert content["start"] == "13:30"
    assert content["end"] == "14:45"
    assert content["tooltip"].splitlines()[0] == section.title
    assert content["border_color"].startswith("#")


def test_malformed_meetings_skipped():
    sections = [
        make_section(
            1, "CS180",
            ("MWF", None, "PT50M"),
            ("Someday", "09:00:00", "PT50M"),
            ("T", "10:00:00", "PT50M"),
        )
    ]
    blocks = layout(sections, [], _colors(sections))
    assert [(b.day_index, b.start_slot) for b in blocks] == [(1, 6)]


def test_format_location():
    assert format_location(None) == "TBA"
    assert format_location({}) == "TBA"
    assert format_location({"Building": {"ShortCode": "WTHR"}, "Number": "104"}) == "WTHR 104"
    assert format_location({"Number": "104"}) == "104"
    assert format_location("ARMS 1010") == "ARMS 1010"
    assert format_location({"Building": "LWSN", "Number": "B151"}) == "LWSN B151"


def test_time_labels():
    labels = time_labels(GridConfig(start_hour=7, end_hour=10))
    assert labels == [(0, "7 AM"), (2, "8 AM"), (4, "9 AM")]
