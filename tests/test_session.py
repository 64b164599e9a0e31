"""Tests for session.py – full recompute pipeline."""
from schedule_synth.config import DEFAULT_PALETTE
from schedule_synth.session import ScheduleSession, ScheduleView

from conftest import make_section


def test_end_to_end(cs180_ma261):
    view = ScheduleSession().render(cs180_ma261)
    assert [c.section_ids for c in view.conflicts] == [(1, 2)]
    assert len(view.blocks) == 6
    assert all(b.conflict for b in view.blocks)
    assert view.colors == {"CS180": DEFAULT_PALETTE[0], "MA261": DEFAULT_PALETTE[1]}
    assert view.banner == "The following courses have overlapping times: CS180 and MA261"


def test_no_conflicts_no_banner():
    sections = [make_section(1, "CS180", ("MWF", "09:00:00", "PT50M"))]
    view = ScheduleSession().render(sections)
    assert view.conflicts == []
    assert view.banner is None
    assert view.has_conflicts is False


def test_colors_stable_across_renders(cs180_ma261):
    session = ScheduleSession()
    first = session.render(cs180_ma261).colors
    # User removes CS180 and adds PHYS172
    second = session.render(
        [cs180_ma261[1], make_section(3, "PHYS172", ("TR", "12:00:00", "PT50M"))]
    ).colors
    assert second["MA261"] == first["MA261"]
    assert second["PHYS172"] == DEFAULT_PALETTE[2]


def test_clear_resets_colors(cs180_ma261):
    session = ScheduleSession()
    session.render(cs180_ma261)
    assert session.clear() == ScheduleView()
    view = session.render([cs180_ma261[1]])
    assert view.colors == {"MA261": DEFAULT_PALETTE[0]}


def test_sessions_are_independent(cs180_ma261):
    a = ScheduleSession()
    b = ScheduleSession()
    a.render(cs180_ma261)
    assert b.render([cs180_ma261[1]]).colors == {"MA261": DEFAULT_PALETTE[0]}


def test_accepts_any_iterable(cs180_ma261):
    view = ScheduleSession().render(iter(cs180_ma261))
    assert len(view.conflicts) == 1


def test_to_dict(cs180_ma261):
    data = ScheduleSession().render(cs180_ma261).to_dict()
    assert data["conflicts"] == [{"sectionIds": [1, 2], "courseLabels": ["CS180", "MA261"]}]
    assert data["banner"].startswith("The following courses")
    assert data["blocks"][0]["dayIndex"] == 0
    assert data["blocks"][0]["sectionId"] == 1
